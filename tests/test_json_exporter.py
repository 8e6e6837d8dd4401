from __future__ import annotations

import json
import shutil

import pytest

from ubigeo_pe.adapters.json_exporter import (
    district_bundle,
    export_static_bundles,
    province_bundle,
    reverse_lookup,
)
from ubigeo_pe.core.errors import UnknownEntity
from ubigeo_pe.core.services.repository import HierarchyRepository


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_export_writes_every_bundle(repository, tmp_path):
    data_root = export_static_bundles(repository=repository, output_dir=tmp_path / "dist")

    assert _read(data_root / "hierarchy.json") == [
        {"id": "01", "name": "Amazonas"},
        {"id": "02", "name": "Áncash"},
        {"id": "15", "name": "Lima"},
        {"id": "21", "name": "Puno"},
    ]
    lima = _read(data_root / "departments" / "15.json")
    assert [p["id"] for p in lima["provinces"]] == ["1508", "1501"]

    province = _read(data_root / "provinces" / "1501.json")
    assert province["department"] == {"id": "15", "name": "Lima"}
    assert [d["name"] for d in province["districts"]] == ["Ate", "Miraflores", "San Isidro"]

    assert len(list((data_root / "districts").glob("*.json"))) == 11
    miraflores = _read(data_root / "districts" / "150122.json")
    assert miraflores["district"]["inei"] == "150140"
    assert miraflores["district"]["entityId"] == 1283

    inei = _read(data_root / "reverse" / "inei.json")
    assert inei["150140"] == {"departmentId": "15", "provinceId": "1501", "districtId": "150122"}


def test_export_resets_previous_output(repository, tmp_path):
    stale = tmp_path / "dist" / "data" / "districts" / "000001.json"
    stale.parent.mkdir(parents=True)
    stale.write_text("{}", encoding="utf-8")

    export_static_bundles(repository=repository, output_dir=tmp_path / "dist")
    assert not stale.exists()


def test_bundles_match_repository_lookups(repository):
    for code, ids in reverse_lookup(repository)["reniec"].items():
        match = repository.lookup_by_primary_code(code)
        assert match.province.id == ids["provinceId"]
        assert district_bundle(repository, code)["district"]["id"] == code


def test_unknown_entities_raise(repository):
    with pytest.raises(UnknownEntity):
        province_bundle(repository, "9999")
    with pytest.raises(UnknownEntity):
        district_bundle(repository, "999999")


def test_export_keeps_districts_of_provinces_sharing_an_id(tmp_path):
    repository = HierarchyRepository.from_raw(
        {
            "Lima": {
                "Lima": {"Ate": {"ubigeo": "150103"}},
                "Lima Metropolitana": {"Breña": {"ubigeo": "150105"}},
            }
        }
    )
    data_root = export_static_bundles(repository=repository, output_dir=tmp_path / "dist")

    written = sorted(p.name for p in (data_root / "districts").glob("*.json"))
    assert written == ["150103.json", "150105.json"]
    assert _read(data_root / "districts" / "150103.json")["district"]["name"] == "Ate"


def test_export_reset_failure_propagates(repository, tmp_path, monkeypatch):
    stale = tmp_path / "dist" / "data" / "hierarchy.json"
    stale.parent.mkdir(parents=True)
    stale.write_text("[]", encoding="utf-8")

    def refuse(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(shutil, "rmtree", refuse)
    with pytest.raises(PermissionError):
        export_static_bundles(repository=repository, output_dir=tmp_path / "dist")
