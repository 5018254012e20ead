"""列表查询组合器（搜索、过滤、排序、分页）的单元测试。"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig, QueryParams, Range, build_predicate
from app.packages.kangalos.models import OrganisationUnit, Project
from app.packages.kangalos.models.base import Base
from app.packages.kangalos.models.partner import Funder

FUNDER_QUERY = QueryConfig(
    searchable_fields=("name", "funder_type"),
    sortable_fields=("name", "funder_type"),
    default_sort="name",
)


@pytest.fixture()
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine)()
    db.add_all(
        [
            Funder(name="World Bank", funder_type="Multilateral"),
            Funder(name="Global Fund", funder_type="Foundation"),
            Funder(name="SIDA", funder_type="Bilateral"),
            Funder(name="Gates Foundation", funder_type="Foundation"),
        ]
    )
    db.commit()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def crud():
    return CRUDBase(Funder, FUNDER_QUERY)


def _names(result):
    return [item.name for item in result.items]


def test_default_sort_is_applied(session, crud):
    result = crud.list_with_filters(session, QueryParams(), page=1, limit=10)

    assert result.total == 4
    assert _names(result) == ["Gates Foundation", "Global Fund", "SIDA", "World Bank"]


def test_search_is_case_insensitive_across_fields(session, crud):
    result = crud.list_with_filters(session, QueryParams(search="foundation"), page=1, limit=10)

    assert _names(result) == ["Gates Foundation", "Global Fund"]


def test_scalar_filter_means_equality(session, crud):
    params = QueryParams(filters={"funder_type": "Bilateral"})
    result = crud.list_with_filters(session, params, page=1, limit=10)

    assert _names(result) == ["SIDA"]


def test_list_filter_means_membership(session, crud):
    params = QueryParams(filters={"funder_type": ["Bilateral", "Multilateral"]})
    result = crud.list_with_filters(session, params, page=1, limit=10)

    assert _names(result) == ["SIDA", "World Bank"]


def test_empty_list_filter_matches_nothing(session, crud):
    params = QueryParams(filters={"funder_type": []})
    result = crud.list_with_filters(session, params, page=1, limit=10)

    assert result.total == 0
    assert result.items == []


def test_none_filter_is_ignored(session, crud):
    params = QueryParams(filters={"funder_type": None})
    assert crud.list_with_filters(session, params, page=1, limit=10).total == 4


def test_descending_sort(session, crud):
    params = QueryParams(sort_by="name", sort_order="DESC")
    result = crud.list_with_filters(session, params, page=1, limit=10)

    assert _names(result) == ["World Bank", "SIDA", "Global Fund", "Gates Foundation"]


def test_unknown_sort_field_falls_back_to_default(session, crud):
    params = QueryParams(sort_by="password", sort_order="asc")
    result = crud.list_with_filters(session, params, page=1, limit=10)

    assert _names(result) == ["Gates Foundation", "Global Fund", "SIDA", "World Bank"]


def test_pagination_counts_all_matches(session, crud):
    result = crud.list_with_filters(session, QueryParams(), page=2, limit=3)

    assert result.total == 4
    assert _names(result) == ["World Bank"]
    assert result.meta("/api/v1/funders")["count"] == 1


def test_search_combines_with_filters(session, crud):
    params = QueryParams(search="o", filters={"funder_type": "Foundation"})
    result = crud.list_with_filters(session, params, page=1, limit=10)

    assert _names(result) == ["Gates Foundation", "Global Fund"]


def test_range_filter_is_inclusive(session):
    unit = OrganisationUnit(name="College A", code="CA")
    session.add(unit)
    session.flush()
    for title, year in (("Early", 2018), ("Middle", 2020), ("Late", 2022)):
        session.add(
            Project(
                title=title,
                title_norm=title.lower(),
                project_type="Research",
                year=year,
                organisation_unit_id=unit.id,
            )
        )
    session.commit()
    config = QueryConfig(sortable_fields=("year",), default_sort="year")
    params = QueryParams(filters={"year": Range(2018, 2020)})

    result = CRUDBase(Project, config).list_with_filters(session, params, page=1, limit=10)

    assert [item.year for item in result.items] == [2018, 2020]



def test_open_range_bounds():
    predicate = build_predicate(
        Funder,
        QueryParams(filters={"name": Range(low="M")}),
        FUNDER_QUERY,
    )
    assert len(predicate.conditions) == 1
    assert predicate.order_by


def test_empty_range_is_ignored():
    predicate = build_predicate(Funder, QueryParams(filters={"name": Range()}), FUNDER_QUERY)
    assert predicate.conditions == []
    assert predicate.order_by


def test_unknown_filter_field_raises():
    with pytest.raises(AttributeError):
        build_predicate(Funder, QueryParams(filters={"nope": 1}), FUNDER_QUERY)
