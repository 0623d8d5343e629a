"""
Movie metadata: a loaded container decoded into header + tag data.

The original (possibly compressed) bytes are not kept; only their size
survives as compressed_length.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Optional

from ..module1_swf_format import (
    FILE_ATTRIBUTE_IS_ACTION_SCRIPT_3,
    Compression,
    Rectangle,
    SwfHeader,
    find_file_attributes,
    read_swf_header,
)


class ActionScriptVersion(IntEnum):
    """Values reported by actionScriptVersion."""
    ACTIONSCRIPT2 = 2
    ACTIONSCRIPT3 = 3


class AvmType(Enum):
    """Script virtual machine a movie targets."""
    AVM1 = "avm1"
    AVM2 = "avm2"

    def into_loader_version(self) -> ActionScriptVersion:
        if self is AvmType.AVM2:
            return ActionScriptVersion.ACTIONSCRIPT3
        return ActionScriptVersion.ACTIONSCRIPT2


@dataclass(frozen=True, eq=False)
class SwfMovie:
    """
    Decoded movie shared between the loader and its loader info.

    Attributes:
        header: Parsed container header (compression as originally declared)
        data: Decompressed tag stream following the header
        compressed_length: Size of the original container in bytes
        url: Where the movie was loaded from, if known
        loader_url: URL of the movie that performed the load, if known
        parameters: Flash vars / query parameters (unique keys)

    Instances compare and hash by identity; they serve as handles into
    the movie library.
    """
    header: SwfHeader
    data: bytes
    compressed_length: int
    url: Optional[str] = None
    loader_url: Optional[str] = None
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'data', bytes(self.data))
        object.__setattr__(self, 'parameters', MappingProxyType(dict(self.parameters)))

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        url: Optional[str] = None,
        loader_url: Optional[str] = None,
        parameters: Optional[Mapping[str, str]] = None
    ) -> "SwfMovie":
        """
        Decode a complete container.

        Raises:
            SwfFormatError: If the container cannot be parsed
        """
        swf_buf = read_swf_header(data)
        return cls(
            header=swf_buf.header,
            data=swf_buf.data,
            compressed_length=len(data),
            url=url,
            loader_url=loader_url,
            parameters=parameters or {},
        )

    @classmethod
    def empty(cls, version: int) -> "SwfMovie":
        """Placeholder movie for a stage that has nothing loaded yet."""
        header = SwfHeader(
            version=version,
            stage_size=Rectangle(),
            frame_rate=1.0,
            num_frames=0,
            compression=Compression.NONE,
        )
        return cls(header=header, data=b"", compressed_length=0)

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def avm_type(self) -> AvmType:
        flags = find_file_attributes(self.data)
        if flags is not None and flags & FILE_ATTRIBUTE_IS_ACTION_SCRIPT_3:
            return AvmType.AVM2
        return AvmType.AVM1

    def __repr__(self) -> str:
        return (
            f"SwfMovie(version={self.header.version}, url={self.url!r}, "
            f"data={len(self.data)} bytes, compressed_length={self.compressed_length})"
        )
