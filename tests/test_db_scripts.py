"""
Tests for database initialization and reset.
"""

import pizza_service.config as config_mod
from pizza_service.auth import verify_password
from pizza_service.db import Database
from pizza_service.init_db import init_db, seed_default_admin
from pizza_service.models import MenuItem, User
from pizza_service.reset_db import reset_db


def _admin_count(database):
    db = database.session()
    try:
        return db.query(User).filter(User.email == "a@jwt.com").count()
    finally:
        db.close()


def test_init_db_without_admin_password_seeds_nothing(monkeypatch):
    monkeypatch.setattr(config_mod, "DEFAULT_ADMIN_PASSWORD", "")
    database = Database("sqlite://")
    init_db(database)

    assert _admin_count(database) == 0
    database.close()


def test_init_db_seeds_admin_once(monkeypatch):
    monkeypatch.setattr(config_mod, "DEFAULT_ADMIN_EMAIL", "a@jwt.com")
    monkeypatch.setattr(config_mod, "DEFAULT_ADMIN_PASSWORD", "admin")
    database = Database("sqlite://")

    init_db(database)
    init_db(database)

    assert _admin_count(database) == 1
    db = database.session()
    try:
        admin = db.query(User).filter(User.email == "a@jwt.com").one()
        assert [r.role for r in admin.roles] == ["admin"]
        assert verify_password("admin", admin.password)
        assert seed_default_admin(db).id == admin.id
    finally:
        db.close()
    database.close()


def test_reset_db_empties_tables():
    database = Database("sqlite://")
    database.open()
    db = database.session()
    db.add(MenuItem(title="Veggie", description="", image="", price=0.0038))
    db.commit()
    db.close()

    reset_db(database)

    db = database.session()
    try:
        assert db.query(MenuItem).count() == 0
    finally:
        db.close()
    database.close()


def test_app_seeds_admin_on_startup(monkeypatch):
    from fastapi.testclient import TestClient

    from pizza_service.app_factory import create_app
    from pizza_service.routes import limiter

    monkeypatch.setattr(config_mod, "DEFAULT_ADMIN_EMAIL", "a@jwt.com")
    monkeypatch.setattr(config_mod, "DEFAULT_ADMIN_PASSWORD", "admin")
    monkeypatch.setattr(limiter, "enabled", False)

    app = create_app(database=Database("sqlite://"))
    with TestClient(app) as client:
        resp = client.put("/api/auth", json={"email": "a@jwt.com", "password": "admin"})
        assert resp.status_code == 200
        assert resp.json()["user"]["roles"] == [{"role": "admin"}]
