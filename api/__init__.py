"""Application assembly for the HTTP interface."""

from api.app import create_app, build_app
