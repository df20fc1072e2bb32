"""View models produced by the page controllers."""

from dataclasses import dataclass, field
from typing import Any, Optional

LOADING = "loading"
SUCCESS = "success"
EMPTY = "empty"
ERROR = "error"


@dataclass
class Pagination:
    total_count: int
    total_pages: int
    current_page: int
    has_prev: bool
    has_next: bool

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Pagination":
        return cls(
            total_count=int(data.get("totalCount") or 0),
            total_pages=int(data.get("totalPages") or 0),
            current_page=int(data.get("currentPage") or 1),
            has_prev=bool(data.get("hasPrev")),
            has_next=bool(data.get("hasNext")),
        )


@dataclass
class PaginationView:
    visible: bool
    prev_enabled: bool = False
    next_enabled: bool = False
    page_numbers: list[int] = field(default_factory=list)
    active_page: Optional[int] = None


@dataclass
class NutritionCard:
    id: Any
    title: str
    summary: str
    tags: list[str]
    image_url: str
    fallback_image_url: str
    source_label: str
    date_label: str
    view_count_label: str
    detail_url: str


@dataclass
class BookmarkListView:
    status: str = LOADING
    cards: list[NutritionCard] = field(default_factory=list)
    total_count: int = 0
    pagination: PaginationView = field(default_factory=lambda: PaginationView(visible=False))
    error_message: Optional[str] = None
    redirect_to: Optional[str] = None

    @property
    def count_label(self) -> str:
        return f"Bookmarked items: {self.total_count}"


@dataclass
class Toast:
    message: str
    type: str = "info"  # "success", "error" or "info"


@dataclass
class HeaderLink:
    label: str
    href: str
    id: Optional[str] = None


@dataclass
class LogoutOutcome:
    success: bool
    toast: Toast
    redirect_to: Optional[str] = None
    reload: bool = False


@dataclass
class ContactForm:
    category: str = ""
    subject: str = ""
    message: str = ""
    email: str = ""


@dataclass
class SubmitOutcome:
    toast: Toast
    reset_form: bool = False
    close_modal: bool = False


@dataclass
class MyStatsView:
    status: str
    values: dict[str, str]
