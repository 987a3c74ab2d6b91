"""
Shared fixtures for the TaskHub test suite.

Settings are always built from explicit values with the ``.env`` file
disabled, so the host environment never leaks into a test.
"""

from typing import Optional

import pytest
from fastapi import APIRouter, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from taskhub.app import create_app
from taskhub.config import Settings
from taskhub.core.errors import ErrorKind, PRODUCT_ERRORS, build_error_registry
from taskhub.core.exceptions import BusinessLogicException
from taskhub.system import system_router

COMPLETE_SETTINGS = {
    "db_uri": "sqlite+aiosqlite:///:memory:",
    "port": 3009,
    "host": "127.0.0.1",
    "jwt_secret": "jwt-secret",
    "jwt_key": "jwt-key",
    "email_user": "mailer",
    "email_pass": "mail-password",
    "email_host": "smtp.example.com",
    "email_service": "smtp",
    "node_env": "test",
}


def make_settings(**overrides) -> Settings:
    values = {**COMPLETE_SETTINGS, **overrides}
    return Settings(_env_file=None, **values)


class ProductIn(BaseModel):
    name: str
    price: float


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    note: Optional[str] = None


def _find_product(product_id: int) -> dict:
    if product_id == 404:
        raise BusinessLogicException(PRODUCT_ERRORS[ErrorKind.NOT_FOUND], "Product not found")
    return {"id": product_id}


products_router = APIRouter()


@products_router.get("/products/{product_id}")
async def get_product(product_id: int):
    return _find_product(product_id)


@products_router.post("/products", response_model=ProductOut, status_code=201)
async def create_product(payload: ProductIn):
    if payload.name == "duplicate":
        raise BusinessLogicException(
            PRODUCT_ERRORS[ErrorKind.ALREADY_EXISTS], "Product already exists"
        )
    return ProductOut(id=7, name=payload.name, price=payload.price)


@products_router.get("/boom")
async def boom():
    raise RuntimeError("connection to db-primary:5432 refused (password=hunter2)")


@products_router.get("/teapot")
async def teapot():
    raise HTTPException(status_code=418, detail="Short and stout")


@products_router.get("/cached")
async def cached():
    raise HTTPException(status_code=304, headers={"ETag": "\"v1\""})


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def registry():
    return build_error_registry()


@pytest.fixture
def app(settings, registry):
    return create_app(settings, registry, routers=(system_router, products_router))


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
