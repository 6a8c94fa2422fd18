# portal/schemas/banner.py
from typing import Literal

from sqlmodel import SQLModel

BannerKind = Literal["success", "error"]


class Banner(SQLModel):
    """
    The single transient message shown by every page.

    Success banners auto-dismiss after `dismiss_after_seconds`; error
    banners have no timeout and persist until replaced or dismissed.
    """

    kind: BannerKind
    message: str
    dismiss_after_seconds: int | None = None
