"""Classification of inbound objects and naming of their derived artifacts.

Every derived key is built from an ``ObjectPath`` decomposition of the input
key, and ``is_already_derived`` recognizes each of those names again, so an
artifact re-delivered as a trigger is always skipped.
"""

import posixpath

from pydantic import BaseModel

from .models import ArtifactKind

IMAGE_PREFIX = "image/"
VIDEO_PREFIX = "video/"

THUMB_PREFIX = "thumb_"
TRANSCODE_SUFFIX = "_output.mp4"
PREVIEW_SUFFIX = "_thumb_output.mp4"
POSTER_SUFFIX = "_poster.jpg"

VIDEO_CONTENT_TYPE = "video/mp4"
POSTER_CONTENT_TYPE = "image/jpeg"


class ObjectPath(BaseModel, frozen=True):
    """A store key split into directory, stem and extension."""

    directory: str
    stem: str
    extension: str

    @classmethod
    def from_key(cls, key: str) -> "ObjectPath":
        directory, name = posixpath.split(key)
        stem, extension = posixpath.splitext(name)
        return cls(directory=directory, stem=stem, extension=extension)

    @property
    def name(self) -> str:
        return f"{self.stem}{self.extension}"

    def with_name(self, name: str) -> str:
        """Key of a sibling object called ``name``."""
        if not self.directory:
            return name
        return posixpath.join(self.directory, name)


def is_image(content_type: str) -> bool:
    return content_type.lower().startswith(IMAGE_PREFIX)


def is_video(content_type: str) -> bool:
    return content_type.lower().startswith(VIDEO_PREFIX)


def is_eligible(content_type: str) -> bool:
    """True for image and video content types, compared case-insensitively."""
    return is_image(content_type) or is_video(content_type)


def is_already_derived(key: str, content_type: str) -> bool:
    """
    Tells whether ``key`` names an artifact this service produced itself.

    Images are derived when their base name starts with the thumbnail prefix
    or ends with the poster suffix; videos when it ends with the transcode
    suffix (which previews share). Base names compare case-insensitively.
    """
    name = ObjectPath.from_key(key).name.lower()
    if is_image(content_type):
        return name.startswith(THUMB_PREFIX) or name.endswith(POSTER_SUFFIX)
    if is_video(content_type):
        return name.endswith(TRANSCODE_SUFFIX)
    return False


def derived_key(key: str, kind: ArtifactKind) -> str:
    """Store key of the ``kind`` artifact derived from ``key``."""
    path = ObjectPath.from_key(key)
    if kind is ArtifactKind.THUMBNAIL:
        return path.with_name(f"{THUMB_PREFIX}{path.name}")
    if kind is ArtifactKind.TRANSCODE:
        return path.with_name(f"{path.stem}{TRANSCODE_SUFFIX}")
    if kind is ArtifactKind.PREVIEW:
        return path.with_name(f"{path.stem}{PREVIEW_SUFFIX}")
    if kind is ArtifactKind.POSTER:
        return path.with_name(f"{path.stem}{POSTER_SUFFIX}")
    raise ValueError(f"Unknown artifact kind: {kind!r}")


def derived_content_type(kind: ArtifactKind, source_content_type: str) -> str:
    """Content type the ``kind`` artifact is stored with."""
    if kind is ArtifactKind.THUMBNAIL:
        return source_content_type
    if kind is ArtifactKind.POSTER:
        return POSTER_CONTENT_TYPE
    return VIDEO_CONTENT_TYPE
