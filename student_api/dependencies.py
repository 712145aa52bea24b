from typing import Iterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from .application.ports.student_repo import StudentRepository
from .application.services.auth_service import AuthService
from .application.services.student_service import StudentService
from .application.services.token_issuer import TokenClaims
from .exceptions import AuthError
from .infrastructure.persistence.sqlalchemy.repositories.student_repository_sql import SqlStudentRepository


# Auth scheme; a missing or non-Bearer header comes through as None
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    state = request.app.state
    return AuthService(
        otp_registry=state.otp_registry,
        notification_sender=state.notification_sender,
        token_issuer=state.token_issuer,
    )


def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise AuthError()
    claims = request.app.state.token_issuer.verify(credentials.credentials)
    return claims


def get_student_repository(request: Request) -> Iterator[StudentRepository]:
    repo = request.app.state.student_repository
    if repo is not None:
        yield repo
        return
    with Session(request.app.state.engine) as session:
        yield SqlStudentRepository(session)


def get_student_service(repo: StudentRepository = Depends(get_student_repository)) -> StudentService:
    return StudentService(student_repo=repo)
