"""
The `fockstate.config` module includes the process-wide rendering settings.
"""

from typing import Any, Optional

KET_CLOSINGS = (">", "〉", "⟩")


class Config:
    _instance = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "Config":
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls, *args, **kwargs)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, "_initialized"):
            self._initialized = True  # Prevents reinitialization
            self._show_annotations = True
            self._ket_close = ">"

    @property
    def show_annotations(self) -> bool:
        """
        Whether `FockState.to_str` renders annotations when not told otherwise
        """
        return self._show_annotations

    def set_show_annotations(self, show_annotations: bool) -> None:
        self._show_annotations = bool(show_annotations)

    @property
    def ket_close(self) -> str:
        return self._ket_close

    def set_ket_close(self, ket_close: str) -> None:
        """
        Sets the closing delimiter used when rendering states
        Parameters
        ----------
        ket_close: str
            One of '>', '〉' or '⟩', all of which the parser accepts
        """
        if ket_close not in KET_CLOSINGS:
            raise ValueError(f"Closing delimiter must be one of {KET_CLOSINGS}, got {ket_close!r}")
        self._ket_close = ket_close


class Session:
    """
    Lightweight context manager to scope Config settings.

    Example:
        with Session(show_annotations=False):
            ...
    Restores previous Config values on exit so tests/runs stay isolated.
    """

    def __init__(
        self,
        *,
        show_annotations: Optional[bool] = None,
        ket_close: Optional[str] = None,
    ) -> None:
        cfg = Config()
        self._prev = {
            "show_annotations": cfg.show_annotations,
            "ket_close": cfg.ket_close,
        }
        self._show_annotations = show_annotations
        self._ket_close = ket_close
        self._cfg = cfg

    def __enter__(self) -> Config:
        if self._show_annotations is not None:
            self._cfg.set_show_annotations(self._show_annotations)
        if self._ket_close is not None:
            self._cfg.set_ket_close(self._ket_close)
        return self._cfg

    def __exit__(self, exc_type, exc, tb) -> None:
        self._cfg.set_show_annotations(self._prev["show_annotations"])
        self._cfg.set_ket_close(self._prev["ket_close"])
