"""Image placeholders: replace broken or local image references with generated PNGs."""
from PIL import Image, ImageDraw
from functools import lru_cache
import base64
import io
import re

DEFAULT_SIZE = (300, 200)
MAX_SIDE = 1600

_IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_SRC_ATTR = re.compile(r"""\bsrc\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)
_DIMENSION = r"""\b{name}\s*=\s*["']?(\d+)"""


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return (222, 236, 249)


@lru_cache(maxsize=64)
def placeholder_data_uri(width: int, height: int, color: str = "#deecf9") -> str:
    """
    Render a flat placeholder with a diagonal cross and return it as a PNG data URI.
    Cached per (width, height, color) since wireframes reuse a handful of sizes.
    """
    width = max(1, min(width, MAX_SIDE))
    height = max(1, min(height, MAX_SIDE))
    fill = _hex_to_rgb(color)
    stroke = tuple(max(0, c - 40) for c in fill)

    img = Image.new("RGB", (width, height), fill)
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, width - 1, height - 1], outline=stroke)
    draw.line([0, 0, width - 1, height - 1], fill=stroke)
    draw.line([0, height - 1, width - 1, 0], fill=stroke)

    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()


def _is_resolvable(src: str) -> bool:
    """Absolute http(s), protocol-relative and data URIs load in a standalone document."""
    src = src.strip()
    return src.startswith(("http://", "https://", "//", "data:"))


def _dimension(tag: str, name: str, default: int) -> int:
    match = re.search(_DIMENSION.format(name=name), tag, re.IGNORECASE)
    return int(match.group(1)) if match else default


def fix_image_placeholders(html: str, color: str = "#deecf9") -> str:
    """Give every <img> with a missing, empty or relative src a generated placeholder."""
    replaced = 0

    def fix_tag(m: re.Match) -> str:
        nonlocal replaced
        tag = m.group(0)
        src = _SRC_ATTR.search(tag)
        if src and _is_resolvable(src.group(2)):
            return tag

        width = _dimension(tag, "width", DEFAULT_SIZE[0])
        height = _dimension(tag, "height", DEFAULT_SIZE[1])
        uri = placeholder_data_uri(width, height, color)
        replaced += 1
        if src:
            return tag[: src.start()] + f'src="{uri}"' + tag[src.end():]
        return tag[:4] + f' src="{uri}"' + tag[4:]

    html = _IMG_TAG.sub(fix_tag, html)
    if replaced:
        print(f"  [images] Replaced {replaced} broken image reference(s)")
    return html
