"""
Codec collaborator boundary for the braw2ilpd tool.

The Blackmagic RAW SDK is not bundled. A backend is any object that follows
the protocols below; it is loaded from an import path such as
``mypackage.braw_backend:create_factory``. This module also owns the scoped
acquisition of factory, codec, clip and immersive interface, released in
reverse order on every exit path.
"""

import importlib
from contextlib import ExitStack, contextmanager
from enum import IntEnum
from typing import Any, Callable, Iterator, Optional, Protocol

import structlog
from pydantic import BaseModel, ConfigDict

from .attributes import ImmersiveAttribute
from .config.constants import (
    EXIT_USAGE,
    EXIT_FACTORY_FAILED,
    EXIT_CODEC_FAILED,
    EXIT_OPEN_CLIP_FAILED,
    EXIT_NOT_IMMERSIVE,
)

logger = structlog.get_logger(__name__)


class VariantType(IntEnum):
    """Variant type tags as numbered by the Blackmagic RAW SDK."""
    EMPTY = 0
    U8 = 1
    S16 = 2
    U16 = 3
    S32 = 4
    U32 = 5
    FLOAT32 = 6
    STRING = 7
    SAFE_ARRAY = 8
    FLOAT64 = 9


class SafeArray(BaseModel):
    """Array payload of a SAFE_ARRAY variant."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    variant_type: int
    element_count: int = 0
    data: Any = None  # bytes-like buffer


class Variant(BaseModel):
    """
    Tagged value returned by an attribute query.

    ``value`` holds a number for scalar tags, a ``str`` or UTF-8 bytes for
    STRING, a SafeArray for SAFE_ARRAY and None for EMPTY.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    vt: int
    value: Any = None


# ===== Errors =====

class AttributeQueryError(Exception):
    """An attribute query did not succeed."""

    def __init__(self, message: str, hresult: Optional[int] = None):
        super().__init__(message)
        self.hresult = hresult

    def __str__(self) -> str:
        message = super().__str__()
        if self.hresult is not None:
            return f"{message} (HRESULT: 0x{self.hresult & 0xFFFFFFFF:x})"
        return message


class ClipAccessError(Exception):
    """Base class for failures while acquiring the clip."""
    exit_code = EXIT_USAGE


class BackendLoadError(ClipAccessError):
    """The codec backend could not be imported."""
    exit_code = EXIT_USAGE


class CodecUnavailableError(ClipAccessError):
    """Factory or codec creation failed."""

    def __init__(self, message: str, exit_code: int = EXIT_CODEC_FAILED):
        super().__init__(message)
        self.exit_code = exit_code


class ClipOpenError(ClipAccessError):
    """The clip could not be opened."""
    exit_code = EXIT_OPEN_CLIP_FAILED


class ImmersiveUnsupportedError(ClipAccessError):
    """The clip does not expose immersive video attributes."""
    exit_code = EXIT_NOT_IMMERSIVE


# ===== Backend protocols =====

class ImmersiveClip(Protocol):
    def get_immersive_attribute(self, attribute: ImmersiveAttribute) -> Variant:
        """Return the variant for one attribute or raise AttributeQueryError."""
        ...


class Clip(Protocol):
    def query_immersive(self) -> Optional[ImmersiveClip]:
        ...


class Codec(Protocol):
    def open_clip(self, path: str) -> Optional[Clip]:
        ...


class CodecFactory(Protocol):
    def create_codec(self) -> Optional[Codec]:
        ...


FactoryProvider = Callable[[], Optional[CodecFactory]]


def load_backend(import_path: str) -> FactoryProvider:
    """
    Resolve a backend factory provider from an import path.

    Args:
        import_path: "package.module:callable"

    Returns:
        FactoryProvider: callable that creates a CodecFactory

    Raises:
        BackendLoadError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr_name = (import_path or "").partition(":")
    if not module_name or not sep or not attr_name:
        raise BackendLoadError(
            f"Invalid backend '{import_path}', expected 'package.module:callable'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise BackendLoadError(f"Cannot import backend module '{module_name}': {e}") from e

    provider = getattr(module, attr_name, None)
    if provider is None or not callable(provider):
        raise BackendLoadError(f"Backend '{import_path}' is not a callable")

    logger.debug("Loaded codec backend", backend=import_path)
    return provider


def _release(resource: Any, kind: str) -> None:
    release = getattr(resource, "release", None)
    if release is None:
        return
    try:
        release()
    except Exception as e:
        logger.warning("Failed to release resource", resource=kind, error=str(e))


@contextmanager
def open_immersive_clip(factory_provider: FactoryProvider, path: str) -> Iterator[ImmersiveClip]:
    """
    Acquire factory, codec, clip and immersive interface for one clip.

    Everything acquired is released in reverse order when the block exits,
    including when a later acquisition step fails.

    Args:
        factory_provider: Callable returning a CodecFactory
        path: Path of the .braw clip

    Yields:
        ImmersiveClip: interface used for attribute queries
    """
    with ExitStack() as stack:
        try:
            factory = factory_provider()
        except Exception as e:
            raise CodecUnavailableError(
                f"Failed to create BlackmagicRawFactory: {e}", exit_code=EXIT_FACTORY_FAILED
            ) from e
        if factory is None:
            raise CodecUnavailableError("Failed to create BlackmagicRawFactory", exit_code=EXIT_FACTORY_FAILED)
        stack.callback(_release, factory, "factory")

        try:
            codec = factory.create_codec()
        except Exception as e:
            raise CodecUnavailableError(f"CreateCodec failed: {e}") from e
        if codec is None:
            raise CodecUnavailableError("CreateCodec failed")
        stack.callback(_release, codec, "codec")

        try:
            clip = codec.open_clip(path)
        except Exception as e:
            raise ClipOpenError(f"OpenClip failed: {path}: {e}") from e
        if clip is None:
            raise ClipOpenError(f"OpenClip failed: {path}")
        stack.callback(_release, clip, "clip")

        try:
            immersive = clip.query_immersive()
        except Exception as e:
            raise ImmersiveUnsupportedError(
                f"This clip does not support immersive video attributes: {e}"
            ) from e
        if immersive is None:
            raise ImmersiveUnsupportedError("This clip does not support immersive video attributes")
        stack.callback(_release, immersive, "immersive")

        logger.debug("Opened immersive clip", path=path)
        yield immersive
