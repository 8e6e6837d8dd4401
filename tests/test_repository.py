from __future__ import annotations

import asyncio

import httpx
import pytest
from pydantic import ValidationError

from ubigeo_pe.core.errors import SourceMalformed, SourceUnavailable
from ubigeo_pe.core.services.repository import HierarchyRepository

from conftest import RAW_HIERARCHY, counting_transport


def test_accessors(repository: HierarchyRepository):
    assert [d.id for d in repository.get_departments()] == ["01", "02", "15", "21"]
    assert repository.get_department_by_id("15").name == "Lima"
    assert repository.get_department_by_id("99") is None
    assert [p.id for p in repository.get_provinces_by_department("15")] == ["1508", "1501"]
    assert repository.get_provinces_by_department("99") == []
    assert repository.get_province_by_id("2108").name == "Melgar"
    assert repository.get_province_by_id("9999") is None
    assert [d.id for d in repository.get_districts_by_province("1508")] == ["150801", "150811"]


def test_unknown_province_returns_empty_sequence(repository: HierarchyRepository):
    assert repository.get_districts_by_province("9999") == []


def test_lookup_by_primary_code_accepts_irregular_format(repository: HierarchyRepository):
    irregular = repository.lookup_by_primary_code("15-01-22")
    plain = repository.lookup_by_primary_code("150122")
    assert irregular is not None
    assert irregular == plain
    assert irregular.department.name == "Lima"
    assert irregular.province.name == "Lima"
    assert irregular.district.name == "Miraflores"


def test_lookup_unknown_code_is_absent(repository: HierarchyRepository):
    assert repository.lookup_by_primary_code("999999") is None
    assert repository.lookup_by_alternate_code("999999") is None


def test_alternate_code_round_trip(repository: HierarchyRepository):
    for department in repository.get_departments():
        for province in repository.get_provinces_by_department(department.id):
            for district in repository.get_districts_by_province(province.id):
                if district.alternate_code is None:
                    continue
                match = repository.lookup_by_alternate_code(district.alternate_code)
                assert match is not None
                assert match.district.id == district.id


def test_returned_lists_are_independent(repository: HierarchyRepository):
    departments = repository.get_departments()
    departments.clear()
    provinces = repository.get_provinces_by_department("15")
    provinces.pop()
    districts = repository.get_districts_by_province("1501")
    districts.append(districts[0])

    assert len(repository.get_departments()) == 4
    assert len(repository.get_provinces_by_department("15")) == 2
    assert len(repository.get_districts_by_province("1501")) == 3


def test_returned_records_cannot_be_mutated(repository: HierarchyRepository):
    department = repository.get_department_by_id("15")
    with pytest.raises(ValidationError):
        department.name = "Otra"
    with pytest.raises(AttributeError):
        department.provinces.append(None)  # type: ignore[attr-defined]
    assert repository.get_department_by_id("15").name == "Lima"


def test_unbootstrapped_repository_behaves_as_empty():
    repository = HierarchyRepository("data/nope.json")
    assert not repository.is_ready
    assert repository.get_departments() == []
    assert repository.lookup_by_primary_code("150122") is None


def test_concurrent_bootstrap_shares_one_load():
    calls: list[str] = []
    url = "https://example.test/ubigeo.json"

    async def scenario():
        async with httpx.AsyncClient(transport=counting_transport(calls, RAW_HIERARCHY)) as client:
            repository = HierarchyRepository(url, client=client)
            first, second, third = await asyncio.gather(
                repository.bootstrap(), repository.bootstrap(), repository.bootstrap()
            )
            again = await repository.bootstrap()
            return repository, first, second, third, again

    repository, first, second, third, again = asyncio.run(scenario())
    assert calls == [url]
    assert first == second == third == again
    assert repository.is_ready
    assert repository.lookup_by_primary_code("150122").district.name == "Miraflores"


def test_bootstrap_from_local_file(data_dir):
    repository = HierarchyRepository(str(data_dir / "code_ubigeo_dep_prov_dis.json"))
    departments = asyncio.run(repository.bootstrap())
    assert [d.name for d in departments] == ["Amazonas", "Áncash", "Lima", "Puno"]


def test_http_error_propagates_and_allows_retry():
    calls: list[str] = []
    url = "https://example.test/ubigeo.json"

    async def scenario():
        failing = httpx.AsyncClient(transport=counting_transport(calls, {}, status_code=503))
        repository = HierarchyRepository(url, client=failing)
        with pytest.raises(SourceUnavailable):
            await repository.bootstrap()
        await failing.aclose()
        assert not repository.is_ready

        async with httpx.AsyncClient(transport=counting_transport(calls, RAW_HIERARCHY)) as working:
            repository._client = working
            return await repository.bootstrap()

    departments = asyncio.run(scenario())
    assert len(calls) == 2
    assert len(departments) == 4


def test_malformed_feed_propagates(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    repository = HierarchyRepository(str(path))
    with pytest.raises(SourceMalformed):
        asyncio.run(repository.bootstrap())
    assert repository.get_departments() == []


def test_in_memory_repository_bootstrap_returns_built_model():
    repository = HierarchyRepository.from_raw(RAW_HIERARCHY)
    assert repository.is_ready

    departments = asyncio.run(repository.bootstrap())
    assert [d.id for d in departments] == ["01", "02", "15", "21"]
    assert asyncio.run(repository.bootstrap()) == departments
