"""Tests for the global exception handlers."""

import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from api.errors import register_error_handlers
from auth.exceptions import StoreError


@pytest.fixture
def app():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/store-down")
    async def store_down():
        raise StoreError("could not connect to 10.0.0.5:5432")

    @app.get("/forbidden")
    async def forbidden():
        raise HTTPException(status_code=403, detail="secret detail")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected internals")

    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


class TestNotFound:

    def test_unknown_path_renders_404_page(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Four oh four" in response.text

    def test_wrong_method_is_not_a_404(self, client):
        response = client.post("/forbidden")

        assert response.status_code == 405
        assert "Four oh four" not in response.text


class TestServerErrors:

    def test_store_error_is_generic_500(self, client, caplog):
        with caplog.at_level(logging.ERROR, logger="api.errors"):
            response = client.get("/store-down")

        assert response.status_code == 500
        assert "10.0.0.5" not in response.text
        assert "Something went wrong" in response.text
        assert "10.0.0.5" in caplog.text

    def test_http_exception_detail_not_leaked(self, client):
        response = client.get("/forbidden")

        assert response.status_code == 403
        assert "secret detail" not in response.text

    def test_unhandled_exception_is_generic_500(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        assert "unexpected internals" not in response.text
        assert "Something went wrong" in response.text
