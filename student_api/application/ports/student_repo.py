from dataclasses import dataclass, asdict
from typing import Protocol, Optional


@dataclass
class StudentDto:
    id: str
    name: str
    phone: str
    email: Optional[str]
    class_name: str
    section: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class NewStudent:
    name: str
    phone: str
    email: Optional[str]
    class_name: str
    section: str


class StudentRepository(Protocol):
    def find_by_phone_or_email(self, phone: str, email: Optional[str]) -> Optional[StudentDto]:
        ...

    def insert(self, student: NewStudent) -> StudentDto:
        ...
