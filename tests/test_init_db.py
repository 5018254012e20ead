"""默认组织结构初始化的单元测试。"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.packages.kangalos.db.init_db import DEFAULT_COLLEGES, seed_default_data
from app.packages.kangalos.models import OrganisationUnit, Position
from app.packages.kangalos.models.base import Base


@pytest.fixture()
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


def test_seed_builds_university_hierarchy(session):
    assert seed_default_data(session) is True
    session.commit()

    school_count = sum(len(schools) for _, _, schools in DEFAULT_COLLEGES)
    assert session.query(OrganisationUnit).count() == 1 + len(DEFAULT_COLLEGES) + school_count
    assert session.query(Position).count() == len(DEFAULT_COLLEGES) + school_count

    root = session.query(OrganisationUnit).filter(OrganisationUnit.code == "UR").one()
    assert root.parent_id is None
    colleges = session.query(OrganisationUnit).filter(OrganisationUnit.parent_id == root.id).all()
    assert sorted(college.code for college in colleges) == sorted(code for code, _, _ in DEFAULT_COLLEGES)

    principal = session.query(Position).filter(Position.title.like("Principal of %")).first()
    assert principal.organisation_unit.parent_id == root.id


def test_seed_is_idempotent(session):
    assert seed_default_data(session) is True
    session.commit()
    before = session.query(OrganisationUnit).count()

    assert seed_default_data(session) is False
    assert session.query(OrganisationUnit).count() == before
