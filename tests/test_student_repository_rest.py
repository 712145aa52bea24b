import json

import httpx
import pytest

from student_api.application.ports.student_repo import NewStudent
from student_api.exceptions import StoreError
from student_api.infrastructure.persistence.supabase.student_repository_rest import SupabaseStudentRepository


def make_repo(handler):
    client = httpx.Client(
        base_url="https://project.supabase.co/rest/v1",
        transport=httpx.MockTransport(handler),
    )
    return SupabaseStudentRepository("https://project.supabase.co", "key", client=client)


def test_default_client_sends_api_key_headers():
    repo = SupabaseStudentRepository("https://project.supabase.co/", "secret-key")
    assert str(repo.client.base_url) == "https://project.supabase.co/rest/v1/"
    assert repo.client.headers["apikey"] == "secret-key"
    assert repo.client.headers["Authorization"] == "Bearer secret-key"
    repo.close()


def test_find_builds_or_filter_and_returns_match():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["or"] = request.url.params["or"]
        return httpx.Response(200, json=[{"id": 7, "name": "A", "phone": "+1", "email": "a@x.io",
                                          "class_name": "X", "section": "Y"}])

    student = make_repo(handler).find_by_phone_or_email("+1", "a@x.io")
    assert seen["path"] == "/rest/v1/students"
    assert seen["or"] == '(phone.eq."+1",email.eq."a@x.io")'
    assert student.id == "7"


def test_find_without_email_only_filters_phone():
    seen = {}

    def handler(request):
        seen["or"] = request.url.params["or"]
        return httpx.Response(200, json=[])

    assert make_repo(handler).find_by_phone_or_email("+1", None) is None
    assert seen["or"] == '(phone.eq."+1")'


def test_find_error_response_is_store_error():
    def handler(request):
        return httpx.Response(500, json={"code": "XX000", "message": "boom"})

    with pytest.raises(StoreError):
        make_repo(handler).find_by_phone_or_email("+1", None)


def test_find_transport_error_is_store_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(StoreError):
        make_repo(handler).find_by_phone_or_email("+1", None)


def test_insert_posts_row_and_returns_representation():
    seen = {}

    def handler(request):
        seen["prefer"] = request.headers["Prefer"]
        seen["body"] = json.loads(request.content)
        row = dict(seen["body"][0], id=42)
        return httpx.Response(201, json=[row])

    student = make_repo(handler).insert(
        NewStudent(name="A", phone="+1", email=None, class_name="X", section="Y")
    )
    assert seen["prefer"] == "return=representation"
    assert seen["body"] == [{"name": "A", "phone": "+1", "email": None, "class_name": "X", "section": "Y"}]
    assert student.id == "42"


def test_insert_error_carries_store_message():
    def handler(request):
        return httpx.Response(400, json={"code": "23502", "message": "null value in column"})

    with pytest.raises(StoreError) as exc_info:
        make_repo(handler).insert(NewStudent(name="A", phone="+1", email=None, class_name="X", section="Y"))
    assert exc_info.value.details == "null value in column"
