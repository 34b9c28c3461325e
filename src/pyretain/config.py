"""Store configuration for pyretain."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pyretain.exceptions import RetainConfigError
from pyretain.models._base import RetainEnum
from pyretain.models.resolved import DEFAULT_TAG_NAMES

#: File name used inside the host configuration directory.
SAVEFILE_NAME = ".retained"


class UnresolvedLayoutPolicy(RetainEnum):
    """What to do with a saved layout name that is no longer registered."""

    KEEP = "keep"
    FALLBACK = "fallback"
    SKIP = "skip"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def config_dir(app: str = "awesome") -> Path:
    """Return the host configuration directory.

    ``$XDG_CONFIG_HOME/<app>`` when set, ``~/.config/<app>`` otherwise.
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / app


def default_savefile() -> Path:
    return config_dir() / SAVEFILE_NAME


def parse_policy(value: str | UnresolvedLayoutPolicy) -> UnresolvedLayoutPolicy:
    try:
        return UnresolvedLayoutPolicy(value)
    except ValueError as exc:
        choices = ", ".join(p.value for p in UnresolvedLayoutPolicy)
        raise RetainConfigError(f"Unknown unresolved layout policy {value!r} (expected one of: {choices})") from exc


@dataclasses.dataclass(frozen=True)
class RetainConfig:
    """Store configuration.

    Parameters
    ----------
    savefile : Path
        Where the JSON state is written. Defaults to ``.retained`` in the
        host configuration directory.
    default_names : tuple of str
        Tag names used for screens without saved state.
    default_layout : str
        Layout name used for default tags, and as the substitute under
        ``UnresolvedLayoutPolicy.FALLBACK``.
    unresolved_layout : UnresolvedLayoutPolicy
        Handling of saved layout names that match no registered layout.
    require_load_before_save : bool
        Reject saves until :meth:`StateStore.load` has run, so a save file
        is never overwritten before it has been read.
    resync_on_screen_added : bool
        Save a screen as soon as the host reports it added.
    atomic_writes : bool
        Write through a temporary file and rename it into place.
    notification_title : str
        Title used for user-visible notifications.
    """

    savefile: Path = dataclasses.field(default_factory=default_savefile)
    default_names: tuple[str, ...] = DEFAULT_TAG_NAMES
    default_layout: str = "floating"
    unresolved_layout: UnresolvedLayoutPolicy = UnresolvedLayoutPolicy.KEEP
    require_load_before_save: bool = True
    resync_on_screen_added: bool = False
    atomic_writes: bool = True
    notification_title: str = "retain"

    def __post_init__(self) -> None:
        # Frozen: normalize through object.__setattr__.
        object.__setattr__(self, "savefile", Path(self.savefile).expanduser())
        object.__setattr__(self, "default_names", tuple(self.default_names))
        object.__setattr__(self, "unresolved_layout", parse_policy(self.unresolved_layout))

    @classmethod
    def from_env(cls, **overrides: Any) -> RetainConfig:
        """Create configuration from environment variables.

        Reads ``RETAIN_SAVEFILE``, ``RETAIN_DEFAULT_NAMES`` (comma separated),
        ``RETAIN_DEFAULT_LAYOUT``, ``RETAIN_UNRESOLVED_LAYOUT``,
        ``RETAIN_REQUIRE_LOAD``, ``RETAIN_RESYNC_ON_ADD`` and
        ``RETAIN_ATOMIC_WRITES``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        savefile = env.get("RETAIN_SAVEFILE")
        if savefile:
            config_kwargs["savefile"] = Path(savefile)

        names = env.get("RETAIN_DEFAULT_NAMES")
        if names:
            config_kwargs["default_names"] = tuple(n.strip() for n in names.split(",") if n.strip())

        layout = env.get("RETAIN_DEFAULT_LAYOUT")
        if layout:
            config_kwargs["default_layout"] = layout.strip()

        policy = env.get("RETAIN_UNRESOLVED_LAYOUT")
        if policy:
            config_kwargs["unresolved_layout"] = parse_policy(policy)

        config_kwargs["require_load_before_save"] = _env_bool(env.get("RETAIN_REQUIRE_LOAD"), True)
        config_kwargs["resync_on_screen_added"] = _env_bool(env.get("RETAIN_RESYNC_ON_ADD"), False)
        config_kwargs["atomic_writes"] = _env_bool(env.get("RETAIN_ATOMIC_WRITES"), True)

        unknown = set(overrides) - {f.name for f in dataclasses.fields(cls)}
        if unknown:
            raise RetainConfigError(f"Unknown config fields: {', '.join(sorted(unknown))}")
        config_kwargs.update(overrides)
        return cls(**config_kwargs)
