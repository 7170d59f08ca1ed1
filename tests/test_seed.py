"""Tests for the demo data seed."""
from property_office.core.security import verify_password
from property_office.db.enums import Role
from property_office.services import seed_demo_data


def test_seed_populates_empty_storage(storage):
    assert seed_demo_data(storage, "admin123") is True

    admin = storage.get_user_by_username("admin")
    assert admin.role == Role.ADMIN
    assert verify_password("admin123", admin.password)

    buildings = storage.list_buildings()
    assert sorted(b.name for b in buildings) == ["Güneş Residans", "Kayseri Plaza"]
    assert all(b.manager_id == admin.id for b in buildings)
    assert len(storage.list_residents()) == 2
    assert all(f.is_occupied for f in storage.list_flats())
    assert len(storage.list_maintenance_requests()) == 1
    assert len(storage.list_published_blog_posts()) == 2


def test_seed_runs_once(storage):
    seed_demo_data(storage, "admin123")
    assert seed_demo_data(storage, "admin123") is False
    assert len(storage.list_buildings()) == 2


def test_seed_on_sql_backend(sql_storage):
    assert seed_demo_data(sql_storage, "admin123") is True
    assert len(sql_storage.list_flats()) == 2
