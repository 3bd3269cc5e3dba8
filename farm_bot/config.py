import os
from dataclasses import dataclass

from .core.controller import FarmPolicy

_TRUE = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE


@dataclass(frozen=True)
class Settings:
    token: str
    application_id: int | None = None
    # farm channels are created under the first category whose name contains this
    category_name: str = "active farms"
    organizer_roles: tuple[str, ...] = ("farm organizer", "farm organiser")
    auto_finalize_on_full: bool = True
    auto_reopen_on_under_capacity: bool = True
    ping_batch_size: int = 10
    ping_delay: float = 1.5

    def policy(self) -> FarmPolicy:
        return FarmPolicy(
            auto_finalize_on_full=self.auto_finalize_on_full,
            auto_reopen_on_under_capacity=self.auto_reopen_on_under_capacity,
            ping_batch_size=self.ping_batch_size,
            ping_delay=self.ping_delay,
        )


def load_settings() -> Settings:
    token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    app_id = os.getenv("DISCORD_APPLICATION_ID", "").strip()
    roles = os.getenv("FARM_ORGANIZER_ROLES", "").strip()
    return Settings(
        token=token or "",
        application_id=int(app_id) if app_id.isdigit() else None,
        category_name=os.getenv("FARM_CATEGORY_NAME", "").strip().lower()
        or "active farms",
        organizer_roles=tuple(r.strip().lower() for r in roles.split(",") if r.strip())
        or ("farm organizer", "farm organiser"),
        auto_finalize_on_full=_flag("FARM_AUTO_FINALIZE", True),
        auto_reopen_on_under_capacity=_flag("FARM_AUTO_REOPEN", True),
        ping_batch_size=int(os.getenv("FARM_PING_BATCH_SIZE", "10")),
        ping_delay=float(os.getenv("FARM_PING_DELAY", "1.5")),
    )
