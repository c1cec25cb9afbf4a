from http import HTTPStatus

from django.test import RequestFactory
from rest_framework.exceptions import NotFound

from config.exceptions import GENERIC_ERROR
from config.exceptions import api_exception_handler


class DummyView:
    pass


def _context():
    request = RequestFactory().get("/api/v1/forum/posts/")
    return {"request": request, "view": DummyView()}


def test_known_errors_keep_drf_shape():
    resp = api_exception_handler(NotFound("Post not found"), _context())
    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.data == {"detail": "Post not found"}


def test_unknown_errors_become_generic_500(settings, caplog):
    settings.DEBUG = False
    resp = api_exception_handler(RuntimeError("db password is hunter2"), _context())

    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.data == {"detail": GENERIC_ERROR}
    assert "DummyView" in caplog.text


def test_debug_adds_error_message(settings):
    settings.DEBUG = True
    resp = api_exception_handler(RuntimeError("boom"), _context())
    assert resp.data["error"] == "boom"
