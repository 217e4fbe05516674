# -*- coding: utf-8 -*-
"""
Builds wall textures and flats from a Doom format .wad as PIL Images.

Wall textures are composited from patches listed in TEXTURE1/TEXTURE2,
flats are raw 64x64 palette indexed lumps between the F_START/F_END markers.
"""

from typing import Final, Optional
from dataclasses import dataclass
from io import BytesIO
import logging
from PIL import Image
from formats import EndOfFileException, read_int, read_ubyte, read_name, read_exact
from formats.wad_reader import WadReader
from formats.wad_structures import TextureDef, PatchHeader


logger = logging.getLogger(__name__)


PALETTE_SIZE: Final[int] = 768  # 256 * 3
PALETTE_COLOURS: Final[int] = 256
FLAT_SIZE: Final[int] = 64
FLAT_BYTES: Final[int] = FLAT_SIZE * FLAT_SIZE
PLACEHOLDER_SIZE: Final[int] = 64
PLACEHOLDER_COLOUR: Final[tuple[int, int, int]] = (255, 0, 255)
MAX_TEXTURES: Final[int] = 10000
MAX_TEXTURE_SIZE: Final[int] = 4096
POST_END: Final[int] = 0xFF

TEXTURE_LUMPS: Final[tuple[str, ...]] = ('TEXTURE1', 'TEXTURE2')
FLAT_START_MARKERS: Final[tuple[str, ...]] = ('F_START', 'FF_START')
FLAT_END_MARKERS: Final[tuple[str, ...]] = ('F_END', 'FF_END')


class Palette:
    """The 256 colours of a PLAYPAL lump as RGB byte triples"""

    def __init__(self, colours: list[tuple[int, int, int]]):
        if len(colours) != PALETTE_COLOURS:
            raise ValueError(f"Palette needs {PALETTE_COLOURS} colours, got {len(colours)}")
        self.colours = colours

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Palette':
        return cls([
            (data[i], data[i + 1], data[i + 2])
            for i in range(0, PALETTE_SIZE, 3)
        ])

    @classmethod
    def default(cls) -> 'Palette':
        return cls([(255, 255, 255)] * PALETTE_COLOURS)

    def __len__(self) -> int:
        return PALETTE_COLOURS

    def __getitem__(self, index: int) -> tuple[int, int, int]:
        return self.colours[index]

    def normalized(self, index: int) -> tuple[float, float, float]:
        r, g, b = self.colours[index]
        return r / 255.0, g / 255.0, b / 255.0

    def to_bytes(self) -> bytes:
        return bytes(channel for colour in self.colours for channel in colour)


@dataclass(frozen=True)
class TextureContext:
    """Read-only data shared by every texture built from one .wad"""
    palette: Palette
    pnames: tuple[str, ...]


@dataclass
class PatchImage:
    header: PatchHeader
    # Per column list of (topdelta, palette indices)
    columns: list[list[tuple[int, bytes]]]

    @property
    def width(self) -> int: return self.header.width
    @property
    def height(self) -> int: return self.header.height


def load_palette(reader: WadReader) -> Palette:
    data = reader.get_lump_data('PLAYPAL')
    if data is None:
        logger.warning('PLAYPAL lump not found, using default palette')
        return Palette.default()
    if len(data) < PALETTE_SIZE:
        logger.warning(f"PLAYPAL lump too small ({len(data)} bytes, "\
                       f"expected {PALETTE_SIZE}), using default palette")
        return Palette.default()
    return Palette.from_bytes(data)


def load_pnames(reader: WadReader) -> tuple[str, ...]:
    data = reader.get_lump_data('PNAMES')
    if data is None or len(data) < 4:
        logger.warning('PNAMES lump not found')
        return ()

    file = BytesIO(data)
    count = read_int(file)
    available = (len(data) - 4) // 8
    if count > available:
        logger.warning(f"PNAMES lists {count} patches but only has room for {available}")
        count = available

    names = tuple(read_name(file) for _ in range(max(count, 0)))
    logger.debug(f"PNAMES contains {len(names)} patch names")
    return names


def load_texture_directory(reader: WadReader, lumpname: str) -> list[TextureDef]:
    data = reader.get_lump_data(lumpname)
    if data is None or len(data) < 4:
        return []

    file = BytesIO(data)
    count = read_int(file)
    if count <= 0 or count > MAX_TEXTURES or len(data) < 4 + count * 4:
        logger.warning(f"{lumpname} has an invalid texture count ({count})")
        return []

    offsets = [read_int(file) for _ in range(count)]
    textures: list[TextureDef] = []
    for offset in offsets:
        if offset < 0 or offset >= len(data):
            logger.warning(f"{lumpname} texture offset {offset} out of range")
            continue
        file.seek(offset)
        try:
            textures.append(TextureDef.read(file))
        except EndOfFileException:
            logger.warning(f"{lumpname} texture at offset {offset} is truncated")
    return textures


def decode_patch(data: bytes) -> Optional[PatchImage]:
    """Decodes the column posts of a patch lump.
    A column pointing outside the lump or cut short ends early."""

    file = BytesIO(data)
    try:
        header = PatchHeader.read(file)
    except EndOfFileException:
        return None

    columns: list[list[tuple[int, bytes]]] = []
    for offset in header.column_offsets:
        posts: list[tuple[int, bytes]] = []
        columns.append(posts)
        if offset >= len(data):
            continue

        file.seek(offset)
        try:
            while (topdelta := read_ubyte(file)) != POST_END:
                length = read_ubyte(file)
                read_ubyte(file)  # padding
                posts.append((topdelta, read_exact(file, length)))
                read_ubyte(file)  # padding
        except EndOfFileException:
            pass

    return PatchImage(header, columns)


def patch_to_image(patch: PatchImage, palette: Palette) -> Optional[Image.Image]:
    """Renders the patch posts into an RGBA image, rows without a post
    stay transparent. Returns None for a patch without pixels."""

    width, height = patch.width, patch.height
    if not 0 < width <= MAX_TEXTURE_SIZE or not 0 < height <= MAX_TEXTURE_SIZE:
        return None

    indices = bytearray(width * height)
    alpha = bytearray(width * height)
    for x, posts in enumerate(patch.columns):
        for topdelta, data in posts:
            for y, index in enumerate(data, topdelta):
                if y >= height:
                    break
                indices[y * width + x] = index
                alpha[y * width + x] = 255

    image = Image.frombytes('P', (width, height), bytes(indices), 'raw')
    image.putpalette(palette.to_bytes())
    image = image.convert('RGBA')
    image.putalpha(Image.frombytes('L', (width, height), bytes(alpha)))
    return image


def apply_patch(canvas: Image.Image, patch_image: Image.Image,
                origin_x: int, origin_y: int) -> None:
    """Pastes the opaque pixels of the patch onto the canvas,
    pixels falling outside of it are dropped"""
    canvas.paste(patch_image, (origin_x, origin_y), patch_image)


def placeholder_image(mode: str = 'RGBA') -> Image.Image:
    colour = PLACEHOLDER_COLOUR + (255,) if mode == 'RGBA' else PLACEHOLDER_COLOUR
    return Image.new(mode, (PLACEHOLDER_SIZE, PLACEHOLDER_SIZE), colour)


class TextureBuilder:
    """
    Builds the composited wall textures and the flats of a .wad.
    The palette and patch names are loaded once on creation,
    decoded patches and their images are cached by name.
    """

    def __init__(self, reader: WadReader, context: Optional[TextureContext] = None):
        self.reader = reader
        if context is None:
            context = TextureContext(load_palette(reader), load_pnames(reader))
        self.context = context
        self.patches: dict[str, Optional[PatchImage]] = {}
        self.patch_images: dict[str, Optional[Image.Image]] = {}

    @property
    def palette(self) -> Palette: return self.context.palette
    @property
    def pnames(self) -> tuple[str, ...]: return self.context.pnames

    def get_patch(self, name: str) -> Optional[PatchImage]:
        if name not in self.patches:
            data = self.reader.get_lump_data(name)
            self.patches[name] = decode_patch(data) if data is not None else None
        return self.patches[name]

    def get_patch_image(self, name: str) -> Optional[Image.Image]:
        if name not in self.patch_images:
            patch = self.get_patch(name)
            self.patch_images[name] = patch_to_image(patch, self.palette) if patch else None
        return self.patch_images[name]

    def build_texture(self, texdef: TextureDef) -> Image.Image:
        width, height = texdef.width, texdef.height
        if not 0 < width <= MAX_TEXTURE_SIZE or not 0 < height <= MAX_TEXTURE_SIZE:
            logger.warning(f"Invalid texture dimensions for {texdef.name} "\
                           f"({width}x{height}), using placeholder")
            return placeholder_image()

        canvas = Image.new('RGBA', (width, height), (0, 0, 0, 0))

        applied = 0
        for placement in texdef.patches:
            if placement.patch >= len(self.pnames):
                logger.warning(f"Patch index {placement.patch} out of range "\
                               f"for texture {texdef.name}")
                continue

            patchname = self.pnames[placement.patch]
            patch_image = self.get_patch_image(patchname)
            if patch_image is None:
                logger.warning(f"Patch {patchname} not found for texture {texdef.name}")
                continue

            apply_patch(canvas, patch_image, placement.origin_x, placement.origin_y)
            applied += 1

        if applied == 0:
            logger.warning(f"No patches applied for texture {texdef.name}, using placeholder")
            return placeholder_image()

        return canvas

    def build_textures(self) -> dict[str, Image.Image]:
        textures: dict[str, Image.Image] = {}
        for lumpname in TEXTURE_LUMPS:
            texdefs = load_texture_directory(self.reader, lumpname)
            logger.debug(f"{lumpname} contains {len(texdefs)} textures")
            for texdef in texdefs:
                if not texdef.name:
                    continue
                textures[texdef.name] = self.build_texture(texdef)

        logger.info(f"Built {len(textures)} textures")
        return textures

    def build_flat(self, data: Optional[bytes], name: str = '') -> Image.Image:
        if data is None:
            logger.warning(f"Flat {name} not found, using placeholder")
            return placeholder_image('RGB')
        if len(data) != FLAT_BYTES:
            logger.warning(f"Flat {name} has invalid size ({len(data)} bytes, "\
                           f"expected {FLAT_BYTES}), using placeholder")
            return placeholder_image('RGB')

        image = Image.frombytes('P', (FLAT_SIZE, FLAT_SIZE), data, 'raw')
        image.putpalette(self.palette.to_bytes())
        return image.convert('RGB')

    def build_flat_by_name(self, name: str) -> Image.Image:
        return self.build_flat(self.reader.get_lump_data(name), name)

    def build_flats(self) -> dict[str, Image.Image]:
        flats: dict[str, Image.Image] = {}
        inside = False
        for i, lump in enumerate(self.reader.lumps):
            if lump.name in FLAT_START_MARKERS:
                inside = True
                continue
            if lump.name in FLAT_END_MARKERS:
                if inside:
                    break
                continue
            if not inside:
                continue
            if lump.size == 0 and lump.name.endswith(('_START', '_END')):
                continue  # Nested markers such as F1_START
            flats[lump.name] = self.build_flat(self.reader.get_lump_data_at(i), lump.name)

        logger.info(f"Built {len(flats)} flats")
        return flats
