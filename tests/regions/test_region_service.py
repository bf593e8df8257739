import pytest

from member_events.core.enums import RecordStatus, RegionKind
from member_events.core.exceptions import RegionNotFound, ValidationError
from member_events.regions.service import RegionService


@pytest.fixture
def service(regions):
    return RegionService(regions)


def test_zones_and_districts_are_separate(service):
    service.add(RegionKind.ZONE, "North")
    service.add(RegionKind.DISTRICT, "Lahore")

    assert [r.name for r in service.list_active(RegionKind.ZONE)] == ["North"]
    assert [r.name for r in service.list_active(RegionKind.DISTRICT)] == ["Lahore"]


def test_add_requires_name(service):
    with pytest.raises(ValidationError, match="Zone is required"):
        service.add(RegionKind.ZONE, " ")


def test_rename_and_soft_delete(service):
    zone = service.add(RegionKind.ZONE, "North")

    renamed = service.update(RegionKind.ZONE, zone.region_id, "North East")
    deleted = service.delete(RegionKind.ZONE, zone.region_id)

    assert renamed.name == "North East"
    assert deleted.status == RecordStatus.DISABLED
    assert service.list_active(RegionKind.ZONE) == []


def test_unknown_district(service):
    with pytest.raises(RegionNotFound, match="District not found!"):
        service.delete(RegionKind.DISTRICT, 9)


def test_search(service):
    service.add(RegionKind.DISTRICT, "Lahore")
    service.add(RegionKind.DISTRICT, "Karachi")
    assert [r.name for r in service.search(RegionKind.DISTRICT, "kar")] == ["Karachi"]
