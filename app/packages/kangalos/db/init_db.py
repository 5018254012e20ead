"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.packages.kangalos.core.config import get_settings
from app.packages.kangalos.core.constants import ROOT_ORGANISATION_CODE, ROOT_ORGANISATION_NAME
from app.packages.kangalos.db import session as db_session
from app.packages.kangalos.models import OrganisationUnit, Position
from app.packages.kangalos.models.base import Base

logger = logging.getLogger(__name__)

# 学院代码、名称及其下属学校
DEFAULT_COLLEGES: list[tuple[str, str, list[str]]] = [
    (
        "CASS",
        "College of Arts and Social Sciences",
        [
            "School of Arts and Languages and Communication Studies",
            "School of Social Studies and Governance",
            "School of Law",
        ],
    ),
    (
        "CAVM",
        "College of Agriculture, Animal Sciences and Veterinary Medicine",
        [
            "School of Medicine and Animal Sciences",
            "School of Agriculture and Food Sciences",
            "School of Agricultural Engineering",
            "School of Forestry, Ecotourism, and Greenspace Management",
        ],
    ),
    (
        "CBE",
        "College of Business and Economics",
        ["School of Business", "School of Economics"],
    ),
    (
        "CE",
        "College of Education",
        [
            "School of Mathematics and Science Education",
            "School of Languages and Social Studies Education",
            "School of Educational Sciences",
        ],
    ),
    (
        "CMHS",
        "College of Medicine and Health Sciences",
        [
            "School of Medicine & Pharmacy",
            "School of Dentistry",
            "School of Nursing and Midwifery",
            "School of Health Sciences",
            "School of Public Health",
        ],
    ),
    (
        "CST",
        "College of Science and Technology",
        [
            "School of Engineering",
            "School of Science",
            "School of Information Communication Technology",
            "School of Architecture and Built Environment",
            "School of Mining and Geology",
        ],
    ),
]


def init_db() -> None:
    """Create all database tables and optionally seed the university hierarchy."""
    Base.metadata.create_all(bind=db_session.engine)

    if not get_settings().seed_default_data:
        return

    session = db_session.SessionLocal()
    try:
        seed_default_data(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed default data during database initialization")
        raise
    finally:
        session.close()


def seed_default_data(session: Session) -> bool:
    """写入大学、学院、学校及院长/校长岗位。已存在根组织时跳过，返回是否写入。"""
    existing = (
        session.query(OrganisationUnit)
        .filter(OrganisationUnit.code == ROOT_ORGANISATION_CODE)
        .first()
    )
    if existing is not None:
        logger.info("Default organisation hierarchy already present, skipping seed")
        return False

    university = OrganisationUnit(name=ROOT_ORGANISATION_NAME, code=ROOT_ORGANISATION_CODE)
    session.add(university)
    session.flush()

    positions = 0
    for code, name, schools in DEFAULT_COLLEGES:
        college = OrganisationUnit(name=name, code=code, parent_id=university.id)
        session.add(college)
        session.flush()
        session.add(
            Position(
                title=f"Principal of {name}",
                description=f"Principal responsible for the overall leadership and management of the {name}.",
                organisation_unit_id=college.id,
            )
        )
        positions += 1
        for school_name in schools:
            school = OrganisationUnit(name=school_name, parent_id=college.id)
            session.add(school)
            session.flush()
            session.add(
                Position(
                    title=f"Dean of {school_name}",
                    description=f"Dean responsible for the academic leadership and administration of the {school_name}.",
                    organisation_unit_id=school.id,
                )
            )
            positions += 1

    session.flush()
    logger.info(
        "Seeded %s with %d colleges and %d positions",
        ROOT_ORGANISATION_NAME,
        len(DEFAULT_COLLEGES),
        positions,
    )
    return True
