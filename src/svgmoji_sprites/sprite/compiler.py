"""SVG sprite compiler.

Combines individually registered SVG shapes into sprite sheets. Shapes are
registered with ``add`` and compiled with ``compile``, which returns at once
and reports the outcome to an error-first callback from a worker thread:

    compiler = SpriteCompiler(SpriteConfig(dest=Path("out"), modes=SpriteModes(stack=ModeConfig())))
    compiler.add(path, path.name, path.read_text())
    compiler.compile(lambda error, result: ...)

Supported output modes:
    stack   nested <svg id="..."> elements, one visible at a time via :target
    symbol  <symbol id="..."> elements for use with <use href="#...">
    defs    nested <svg id="..."> elements inside <defs>

Namespaces are stripped from every tag and attribute so the output stays
compact and id-friendly. Ids inside a shape are prefixed with the shape id
so that gradients and masks of different shapes cannot collide.
"""

import hashlib
import logging
import re
import threading
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from svgmoji_sprites.constants import (
    BUST_HASH_LENGTH,
    DEFAULT_VIEW_BOX,
    DEFS_MODE,
    SPRITE_RESOURCE,
    STACK_MODE,
    STACK_STYLE,
    SVG_NAMESPACE,
    SYMBOL_MODE,
    XLINK_NAMESPACE,
)
from svgmoji_sprites.utils.path_utils import shape_id_from_path

logger = logging.getLogger(__name__)

_URL_REFERENCE = re.compile(r"url\(\s*['\"]?#([^)'\"\s]+)['\"]?\s*\)")
_LENGTH = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")


class ModeConfig(BaseModel):
    """Output settings for one sprite mode."""

    dest: str = ""  # Directory relative to the compiler destination
    sprite: str = "sprite.svg"
    bust: bool = False  # Insert a content hash into the file name


class SpriteModes(BaseModel):
    """Enabled output modes. A mode left as None is not generated."""

    stack: ModeConfig | None = None
    symbol: ModeConfig | None = None
    defs: ModeConfig | None = None

    def enabled(self) -> dict[str, ModeConfig]:
        """Map the name of every enabled mode to its settings."""
        modes = {STACK_MODE: self.stack, SYMBOL_MODE: self.symbol, DEFS_MODE: self.defs}
        return {name: mode for name, mode in modes.items() if mode is not None}


class ShapeConfig(BaseModel):
    """How registered shapes are identified and transformed."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id_generator: Callable[[str], str] = shape_id_from_path
    namespace_ids: bool = True


class SpriteConfig(BaseModel):
    """Complete compiler configuration."""

    dest: Path
    modes: SpriteModes = SpriteModes()
    shape: ShapeConfig = ShapeConfig()


@dataclass(frozen=True)
class SpriteResource:
    """A file produced by the compiler, not yet written to disk."""

    path: Path
    contents: bytes


CompileResult = dict[str, dict[str, SpriteResource]]
CompileCallback = Callable[[BaseException | None, CompileResult | None], None]


@dataclass
class _Shape:
    id: str
    name: str
    path: Path
    contents: str


@dataclass
class _PreparedShape:
    id: str
    view_box: str
    width: str | None
    height: str | None
    children: list[ET.Element]


def _strip_ns(tag: str) -> str:
    """Remove a namespace prefix like '{http://www.w3.org/2000/svg}'."""
    return tag.split("}", 1)[1] if "}" in tag else tag


def _parse_length(value: str | None) -> float | None:
    if value is None:
        return None
    match = _LENGTH.match(value)
    return float(match.group(1)) if match else None


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def _view_box(root: ET.Element) -> str:
    """Use the shape's viewBox, else derive one from its width and height."""
    view_box = root.get("viewBox")
    if view_box:
        return view_box
    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    if width and height:
        return f"0 0 {_format_number(width)} {_format_number(height)}"
    return DEFAULT_VIEW_BOX


def _namespace_ids(root: ET.Element, prefix: str) -> None:
    """Prefix every id below ``root`` and rewrite references to it."""
    mapping: dict[str, str] = {}
    for element in root.iter():
        if element is root:
            continue
        element_id = element.get("id")
        if element_id:
            mapping[element_id] = f"{prefix}-{element_id}"

    if not mapping:
        return

    def replace_url(match: re.Match[str]) -> str:
        target = match.group(1)
        return f"url(#{mapping.get(target, target)})"

    for element in root.iter():
        for key, value in list(element.attrib.items()):
            if key == "id" and value in mapping:
                element.set(key, mapping[value])
            elif key == "href" and value.startswith("#") and value[1:] in mapping:
                element.set(key, f"#{mapping[value[1:]]}")
            elif "url(" in value:
                element.set(key, _URL_REFERENCE.sub(replace_url, value))
        if element.tag == "style" and element.text and "url(" in element.text:
            element.text = _URL_REFERENCE.sub(replace_url, element.text)


def _sprite_root() -> ET.Element:
    return ET.Element("svg", {"xmlns": SVG_NAMESPACE, "xmlns:xlink": XLINK_NAMESPACE})


def _nested_svg(shape: _PreparedShape) -> ET.Element:
    attributes = {"id": shape.id, "viewBox": shape.view_box}
    if shape.width and shape.height:
        attributes["width"] = shape.width
        attributes["height"] = shape.height
    element = ET.Element("svg", attributes)
    element.extend(shape.children)
    return element


def _render_stack(shapes: list[_PreparedShape]) -> ET.Element:
    sprite = _sprite_root()
    style = ET.SubElement(sprite, "style")
    style.text = STACK_STYLE
    sprite.extend(_nested_svg(shape) for shape in shapes)
    return sprite


def _render_symbol(shapes: list[_PreparedShape]) -> ET.Element:
    sprite = _sprite_root()
    for shape in shapes:
        symbol = ET.SubElement(sprite, "symbol", {"id": shape.id, "viewBox": shape.view_box})
        symbol.extend(shape.children)
    return sprite


def _render_defs(shapes: list[_PreparedShape]) -> ET.Element:
    sprite = _sprite_root()
    defs = ET.SubElement(sprite, "defs")
    defs.extend(_nested_svg(shape) for shape in shapes)
    return sprite


_RENDERERS: dict[str, Callable[[list[_PreparedShape]], ET.Element]] = {
    STACK_MODE: _render_stack,
    SYMBOL_MODE: _render_symbol,
    DEFS_MODE: _render_defs,
}


def _busted_name(sprite: str, contents: bytes) -> str:
    digest = hashlib.md5(contents).hexdigest()[:BUST_HASH_LENGTH]  # noqa: S324
    stem, dot, extension = sprite.rpartition(".")
    if not dot:
        return f"{sprite}-{digest}"
    return f"{stem}-{digest}.{extension}"


class SpriteCompiler:
    """Collects SVG shapes and compiles them into sprite sheets."""

    def __init__(self, config: SpriteConfig) -> None:
        """Initialize the compiler.

        Args:
            config: Destination, enabled modes and shape settings.
        """
        self.config = config
        self._shapes: dict[str, _Shape] = {}

    @property
    def shape_count(self) -> int:
        """Number of registered shapes."""
        return len(self._shapes)

    def add(self, path: str | Path, name: str, contents: str) -> str:
        """Register a shape.

        Registering a second shape with the same id replaces the first.

        Args:
            path: Source path of the shape, passed to the id generator
            name: Source file name
            contents: Raw SVG markup

        Returns:
            The generated shape id.
        """
        shape_id = self.config.shape.id_generator(str(path))
        self._shapes[shape_id] = _Shape(id=shape_id, name=name, path=Path(path), contents=contents)
        return shape_id

    def compile(self, callback: CompileCallback) -> None:
        """Compile on a worker thread and report through ``callback``.

        The callback is invoked exactly once, from the worker thread, as
        ``callback(error, None)`` on failure or ``callback(None, result)``.

        Args:
            callback: Error-first completion callback.
        """
        worker = threading.Thread(
            target=self._compile_and_report,
            args=(callback,),
            name=f"sprite-compiler-{self.config.dest.name}",
            daemon=True,
        )
        worker.start()

    def _compile_and_report(self, callback: CompileCallback) -> None:
        try:
            result = self.build()
        except Exception as e:
            # Failures travel to the caller through the callback
            callback(e, None)
            return
        callback(None, result)

    def build(self) -> CompileResult:
        """Compile synchronously.

        Returns:
            Resources per enabled mode. Every mode is empty when no shapes
            were registered.

        Raises:
            ET.ParseError: If a shape is not well-formed XML.
            ValueError: If a shape's root element is not ``<svg>``.
        """
        modes = self.config.modes.enabled()
        if not self._shapes:
            return {name: {} for name in modes}

        shapes = [self._prepare(shape) for shape in self._shapes.values()]
        result: CompileResult = {}
        for name, mode in modes.items():
            sprite = _RENDERERS[name](shapes)
            contents = self._serialize(sprite)
            file_name = _busted_name(mode.sprite, contents) if mode.bust else mode.sprite
            path = self.config.dest / mode.dest / file_name
            result[name] = {SPRITE_RESOURCE: SpriteResource(path=path, contents=contents)}

        logger.debug(f"Compiled {len(shapes)} shapes into {', '.join(result)} sprites")
        return result

    def _prepare(self, shape: _Shape) -> _PreparedShape:
        try:
            root = ET.fromstring(shape.contents.encode("utf-8"))
        except ET.ParseError as e:
            raise ET.ParseError(f"{shape.path}: {e}") from e

        # Remove namespaces from *all* tags & attributes
        for element in root.iter():
            element.tag = _strip_ns(element.tag)
            element.attrib = {_strip_ns(k): v for k, v in element.attrib.items()}

        if root.tag != "svg":
            raise ValueError(f"{shape.path}: root element is <{root.tag}>, expected <svg>")

        if self.config.shape.namespace_ids:
            _namespace_ids(root, shape.id)

        return _PreparedShape(
            id=shape.id,
            view_box=_view_box(root),
            width=root.get("width"),
            height=root.get("height"),
            children=list(root),
        )

    @staticmethod
    def _serialize(sprite: ET.Element) -> bytes:
        markup = ET.tostring(sprite, encoding="unicode", short_empty_elements=False)
        return f'<?xml version="1.0" encoding="utf-8"?>{markup}'.encode()
