"""
Storage contract tests.

Every test runs against MemStorage and SqlStorage (SQLite in memory) so
both backends stay interchangeable.
"""
import pytest

from property_office.db.enums import ContactStatus, MaintenancePriority, MaintenanceStatus, Role
from property_office.schemas import (
    BlogPostCreate,
    BlogPostUpdate,
    BuildingCreate,
    BuildingUpdate,
    ContactRequestCreate,
    ContactStatusUpdate,
    FeePaymentCreate,
    FeePaymentUpdate,
    FlatCreate,
    FlatUpdate,
    MaintenanceRequestCreate,
    MaintenanceRequestUpdate,
    ResidentCreate,
    ResidentUpdate,
    UserCreate,
    UserUpsert,
)
from property_office.storage import MemStorage, ReferenceNotFoundError, UserAlreadyExistsError


@pytest.fixture(params=["memory", "sql"])
def backend(request, sql_storage):
    if request.param == "memory":
        return MemStorage()
    return sql_storage


def _building(backend, **overrides):
    data = {"name": "Güneş Residans", "address": "Melikgazi, Kayseri", "total_flats": 24, "monthly_fee": "850"}
    data.update(overrides)
    return backend.create_building(BuildingCreate(**data))


def _flat(backend, building_id, **overrides):
    return backend.create_flat(FlatCreate(building_id=building_id, flat_number="12", **overrides))


# =============================================================================
# Create / get / list
# =============================================================================

def test_create_assigns_id_and_created_at(backend):
    building = _building(backend)
    assert building.id
    assert building.created_at.tzinfo is not None
    assert building.monthly_fee == "850.00"


def test_create_ids_are_unique(backend):
    ids = {_building(backend).id for _ in range(5)}
    assert len(ids) == 5


def test_get_returns_stored_record(backend):
    building = _building(backend)
    assert backend.get_building(building.id) == building


def test_get_unknown_is_none(backend):
    assert backend.get_building("missing") is None
    assert backend.get_flat("missing") is None
    assert backend.get_user("missing") is None


def test_defaults_applied_on_create(backend):
    building = _building(backend)
    flat = _flat(backend, building.id)
    payment = backend.create_fee_payment(
        FeePaymentCreate(flat_id=flat.id, amount="850", month=1, year=2025)
    )
    request = backend.create_maintenance_request(
        MaintenanceRequestCreate(flat_id=flat.id, description="Leaking tap")
    )
    post = backend.create_blog_post(BlogPostCreate(title="Hello", content="World"))
    contact = backend.create_contact_request(
        ContactRequestCreate(name="Ayşe", email="ayse@example.com", message="Hi")
    )
    user = backend.create_user(UserCreate(username="someone"))

    assert payment.is_paid is False
    assert payment.paid_at is None
    assert request.status == MaintenanceStatus.PENDING
    assert request.priority == MaintenancePriority.MEDIUM
    assert post.published is False
    assert contact.status == ContactStatus.NEW
    assert user.role == Role.USER


def test_list_published_blog_posts(backend):
    backend.create_blog_post(BlogPostCreate(title="a", content="x", published=True))
    backend.create_blog_post(BlogPostCreate(title="b", content="x"))
    backend.create_blog_post(BlogPostCreate(title="c", content="x", published=True))

    published = backend.list_published_blog_posts()
    assert sorted(p.title for p in published) == ["a", "c"]
    assert len(backend.list_blog_posts()) == 3


def test_list_flats_by_building(backend):
    first = _building(backend)
    second = _building(backend, name="Kayseri Plaza")
    _flat(backend, first.id)
    _flat(backend, first.id, block="B")
    _flat(backend, second.id)

    assert len(backend.list_flats_by_building(first.id)) == 2
    assert len(backend.list_flats_by_building(second.id)) == 1
    assert backend.list_flats_by_building("missing") == []


def test_list_fee_payments_by_flat(backend):
    building = _building(backend)
    flat = _flat(backend, building.id)
    other = _flat(backend, building.id, block="C")
    backend.create_fee_payment(FeePaymentCreate(flat_id=flat.id, amount="1", month=1, year=2025))
    backend.create_fee_payment(FeePaymentCreate(flat_id=other.id, amount="1", month=1, year=2025))

    payments = backend.list_fee_payments_by_flat(flat.id)
    assert [p.flat_id for p in payments] == [flat.id]


# =============================================================================
# Update
# =============================================================================

def test_update_merges_only_supplied_fields(backend):
    building = _building(backend)
    updated = backend.update_building(building.id, BuildingUpdate(name="Renamed"))

    assert updated.name == "Renamed"
    assert updated.address == building.address
    assert updated.total_flats == building.total_flats
    assert updated.monthly_fee == building.monthly_fee
    assert updated.id == building.id
    assert updated.created_at == building.created_at


def test_update_can_clear_nullable_field(backend):
    building = _building(backend)
    resident = backend.create_resident(ResidentCreate(name="Ahmet"))
    flat = _flat(backend, building.id, resident_id=resident.id)

    updated = backend.update_flat(flat.id, FlatUpdate(resident_id=None))
    assert updated.resident_id is None


def test_update_unknown_is_none(backend):
    assert backend.update_building("missing", BuildingUpdate(name="x")) is None
    assert backend.update_resident("missing", ResidentUpdate(name="x")) is None
    assert backend.update_fee_payment("missing", FeePaymentUpdate(is_paid=True)) is None
    assert backend.update_blog_post("missing", BlogPostUpdate(title="x")) is None
    assert (
        backend.update_contact_request("missing", ContactStatusUpdate(status=ContactStatus.RESOLVED))
        is None
    )


def test_update_maintenance_status(backend):
    building = _building(backend)
    flat = _flat(backend, building.id)
    request = backend.create_maintenance_request(
        MaintenanceRequestCreate(flat_id=flat.id, description="Broken lift")
    )
    updated = backend.update_maintenance_request(
        request.id, MaintenanceRequestUpdate(status=MaintenanceStatus.COMPLETED)
    )
    assert updated.status == MaintenanceStatus.COMPLETED
    assert updated.description == "Broken lift"
    assert updated.resolved_at is None


def test_update_contact_status(backend):
    contact = backend.create_contact_request(
        ContactRequestCreate(name="Ali", email="ali@example.com", message="Quote please")
    )
    updated = backend.update_contact_request(
        contact.id, ContactStatusUpdate(status=ContactStatus.IN_PROGRESS)
    )
    assert updated.status == ContactStatus.IN_PROGRESS
    assert [c.status for c in backend.list_contact_requests()] == [ContactStatus.IN_PROGRESS]


def test_returned_records_are_copies(backend):
    building = _building(backend)
    building.name = "Mutated locally"
    assert backend.get_building(building.id).name == "Güneş Residans"


# =============================================================================
# Delete and referential rules
# =============================================================================

def test_delete_returns_true_then_false(backend):
    building = _building(backend)
    assert backend.delete_building(building.id) is True
    assert backend.delete_building(building.id) is False
    assert backend.get_building(building.id) is None


def test_delete_building_cascades_to_flats_and_their_records(backend):
    building = _building(backend)
    flat = _flat(backend, building.id)
    backend.create_fee_payment(FeePaymentCreate(flat_id=flat.id, amount="850", month=2, year=2025))
    backend.create_maintenance_request(
        MaintenanceRequestCreate(flat_id=flat.id, description="Heating")
    )

    backend.delete_building(building.id)

    assert backend.get_flat(flat.id) is None
    assert backend.list_fee_payments() == []
    assert backend.list_maintenance_requests() == []


def test_delete_flat_cascades(backend):
    building = _building(backend)
    flat = _flat(backend, building.id)
    backend.create_fee_payment(FeePaymentCreate(flat_id=flat.id, amount="850", month=2, year=2025))

    assert backend.delete_flat(flat.id) is True
    assert backend.list_fee_payments_by_flat(flat.id) == []
    assert backend.get_building(building.id) is not None


def test_delete_resident_vacates_flat(backend):
    building = _building(backend)
    resident = backend.create_resident(ResidentCreate(name="Fatma"))
    flat = _flat(backend, building.id, resident_id=resident.id)

    backend.delete_resident(resident.id)

    assert backend.get_flat(flat.id).resident_id is None


def test_delete_user_clears_building_manager(backend):
    manager = backend.create_user(UserCreate(username="manager"))
    building = _building(backend, manager_id=manager.id)

    backend.delete_user(manager.id)

    assert backend.get_building(building.id).manager_id is None


def test_create_with_unknown_reference_rejected(backend):
    with pytest.raises(ReferenceNotFoundError) as exc:
        _flat(backend, "missing-building")
    assert exc.value.field == "buildingId"
    assert backend.list_flats() == []


def test_update_with_unknown_reference_rejected(backend):
    building = _building(backend)
    flat = _flat(backend, building.id)
    with pytest.raises(ReferenceNotFoundError) as exc:
        backend.update_flat(flat.id, FlatUpdate(resident_id="missing"))
    assert exc.value.field == "residentId"
    assert backend.get_flat(flat.id).resident_id is None


# =============================================================================
# Users
# =============================================================================

def test_get_user_by_username(backend):
    user = backend.create_user(UserCreate(username="mehmet", password="hash"))
    assert backend.get_user_by_username("mehmet").id == user.id
    assert backend.get_user_by_username("nobody") is None


def test_duplicate_username_rejected(backend):
    backend.create_user(UserCreate(username="mehmet"))
    with pytest.raises(UserAlreadyExistsError) as exc:
        backend.create_user(UserCreate(username="mehmet"))
    assert exc.value.field == "username"


def test_duplicate_email_rejected(backend):
    backend.create_user(UserCreate(username="a", email="same@example.com"))
    with pytest.raises(UserAlreadyExistsError) as exc:
        backend.create_user(UserCreate(username="b", email="same@example.com"))
    assert exc.value.field == "email"


def test_upsert_creates_with_given_id(backend):
    user = backend.upsert_user(UserUpsert(id="external-1", email="x@example.com"))
    assert user.id == "external-1"
    assert user.role == Role.USER
    assert backend.get_user("external-1") is not None


def test_upsert_merges_non_null_fields(backend):
    user = backend.create_user(UserCreate(username="ayse", first_name="Ayşe", password="old"))
    merged = backend.upsert_user(UserUpsert(id=user.id, password="new"))

    assert merged.password == "new"
    assert merged.first_name == "Ayşe"
    assert merged.username == "ayse"
    assert merged.updated_at >= user.updated_at


def test_upsert_changes_role(backend):
    user = backend.create_user(UserCreate(username="ayse"))
    updated = backend.upsert_user(UserUpsert(id=user.id, role=Role.ADMIN))
    assert updated.role == Role.ADMIN
    assert updated.username == "ayse"
    assert backend.get_user(user.id).role == Role.ADMIN
