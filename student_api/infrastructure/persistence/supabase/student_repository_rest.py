import logging
from typing import Any, Dict, Optional

import httpx

from ....application.ports.student_repo import StudentRepository, StudentDto, NewStudent
from ....exceptions import StoreError

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    # PostgREST reserves , . : ( ) inside logic trees; double quotes make the value literal
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)


class SupabaseStudentRepository(StudentRepository):
    """Students table accessed through the Supabase PostgREST endpoint."""

    def __init__(self, base_url: str, api_key: str, table: str = "students",
                 timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.table = table
        self.client = client or httpx.Client(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
        )

    def _to_dto(self, row: Dict[str, Any]) -> StudentDto:
        return StudentDto(
            id=str(row["id"]),
            name=row.get("name"),
            phone=row.get("phone"),
            email=row.get("email"),
            class_name=row.get("class_name"),
            section=row.get("section"),
        )

    def find_by_phone_or_email(self, phone: str, email: Optional[str]) -> Optional[StudentDto]:
        filters = [f"phone.eq.{_quote(phone)}"]
        if email:
            filters.append(f"email.eq.{_quote(email)}")
        params = {"select": "*", "or": f"({','.join(filters)})", "limit": "1"}
        try:
            response = self.client.get(f"/{self.table}", params=params)
        except httpx.HTTPError as e:
            logger.error(f"Error checking existing student: {e}")
            raise StoreError()
        if response.status_code != 200:
            logger.error(f"Error checking existing student: {response.status_code} {_error_message(response)}")
            raise StoreError()
        rows = response.json()
        return self._to_dto(rows[0]) if rows else None

    def insert(self, student: NewStudent) -> StudentDto:
        row = {
            "name": student.name,
            "phone": student.phone,
            "email": student.email,
            "class_name": student.class_name,
            "section": student.section,
        }
        try:
            response = self.client.post(
                f"/{self.table}",
                json=[row],
                headers={"Prefer": "return=representation"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Error adding student: {e}")
            raise StoreError(details=str(e))
        if response.status_code not in (200, 201):
            message = _error_message(response)
            logger.error(f"Error adding student: {response.status_code} {message}")
            raise StoreError(details=message)
        rows = response.json()
        if not rows:
            raise StoreError(details="Insert returned no rows")
        return self._to_dto(rows[0])

    def close(self) -> None:
        self.client.close()
