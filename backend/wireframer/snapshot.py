"""
Typed snapshot records and the normalizer that builds them.

The sampler hands over unbounded, possibly repetitive collections. normalize()
is the single place where they are deduplicated and truncated to the caps in
CAPS, so everything downstream can assume bounded input.
"""

from dataclasses import dataclass, field
from typing import Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict

LayoutKind = Literal["grid", "flexbox", "block", "other"]

CAPS = {
    "colors": 20,
    "fonts": 5,
    "font_sizes": 10,
    "font_weights": 5,
    "paddings": 10,
    "margins": 10,
    "gaps": 5,
    "sections": 15,
    "navigation_links": 20,
    "region_samples": 8,
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ComputedStyle(_Frozen):
    display: str = ""
    position: str = ""
    width: str = ""
    height: str = ""
    padding: str = ""
    margin: str = ""
    gap: str = ""
    background_color: str = ""
    color: str = ""
    border_color: str = ""
    font_size: str = ""
    font_weight: str = ""
    font_family: str = ""
    line_height: str = ""
    letter_spacing: str = ""
    text_align: str = ""
    text_transform: str = ""
    flex_direction: str = ""
    justify_content: str = ""
    align_items: str = ""
    flex_wrap: str = ""
    grid_template_columns: str = ""
    grid_template_rows: str = ""


class BoundingBox(_Frozen):
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0


class NavigationLink(_Frozen):
    text: str
    href: str = "#"
    bounding_box: BoundingBox = BoundingBox()
    style: Optional[ComputedStyle] = None


class SectionDescriptor(_Frozen):
    index: int
    heading: str = ""
    heading_tag: str = ""
    layout: LayoutKind = "other"
    style: Optional[ComputedStyle] = None
    button_count: int = 0
    button_texts: tuple[str, ...] = ()
    image_count: int = 0
    image_alts: tuple[str, ...] = ()
    link_count: int = 0
    link_texts: tuple[str, ...] = ()
    form_element_count: int = 0
    paragraph_count: int = 0
    paragraph_samples: tuple[str, ...] = ()
    list_count: int = 0
    bounding_box: BoundingBox = BoundingBox()
    class_name: str = ""
    element_id: str = ""

    @property
    def has_buttons(self) -> bool:
        return self.button_count > 0

    @property
    def has_images(self) -> bool:
        return self.image_count > 0

    @property
    def has_links(self) -> bool:
        return self.link_count > 0

    @property
    def has_forms(self) -> bool:
        return self.form_element_count > 0

    @property
    def has_paragraphs(self) -> bool:
        return self.paragraph_count > 0

    @property
    def has_lists(self) -> bool:
        return self.list_count > 0


class Typography(_Frozen):
    fonts: tuple[str, ...] = ()
    sizes: tuple[str, ...] = ()
    weights: tuple[str, ...] = ()


class Spacing(_Frozen):
    paddings: tuple[str, ...] = ()
    margins: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()


class HeadingProfile(_Frozen):
    count: int = 0
    style: Optional[ComputedStyle] = None


class Hierarchy(_Frozen):
    h1: HeadingProfile = HeadingProfile()
    h2: HeadingProfile = HeadingProfile()
    h3: HeadingProfile = HeadingProfile()
    body: Optional[ComputedStyle] = None

    def level(self, tag: str) -> HeadingProfile:
        return getattr(self, tag)


class RegionSummary(_Frozen):
    count: int = 0
    samples: tuple[str, ...] = ()
    description: str = ""


# Region keys and their human labels, in the order they are reported
REGIONS = {
    "header": "Header/Navigation",
    "main": "Main Content",
    "sidebar": "Sidebar",
    "footer": "Footer",
    "navigation": "Navigation",
    "buttons": "Buttons",
    "forms": "Forms",
    "images": "Images",
    "links": "Links",
}

CONTENT_REGIONS = {
    "headings": "Headings",
    "paragraphs": "Paragraphs",
    "lists": "Lists",
    "containers": "Containers",
    "section_blocks": "Sections",
    "articles": "Articles",
}


class StructureCounts(_Frozen):
    header: RegionSummary = RegionSummary(description=REGIONS["header"])
    main: RegionSummary = RegionSummary(description=REGIONS["main"])
    sidebar: RegionSummary = RegionSummary(description=REGIONS["sidebar"])
    footer: RegionSummary = RegionSummary(description=REGIONS["footer"])
    navigation: RegionSummary = RegionSummary(description=REGIONS["navigation"])
    buttons: RegionSummary = RegionSummary(description=REGIONS["buttons"])
    forms: RegionSummary = RegionSummary(description=REGIONS["forms"])
    images: RegionSummary = RegionSummary(description=REGIONS["images"])
    links: RegionSummary = RegionSummary(description=REGIONS["links"])

    def regions(self) -> list[tuple[str, RegionSummary]]:
        return [(key, getattr(self, key)) for key in REGIONS]

    @property
    def total(self) -> int:
        return sum(summary.count for _, summary in self.regions())


class ContentCounts(_Frozen):
    headings: RegionSummary = RegionSummary(description=CONTENT_REGIONS["headings"])
    paragraphs: RegionSummary = RegionSummary(description=CONTENT_REGIONS["paragraphs"])
    lists: RegionSummary = RegionSummary(description=CONTENT_REGIONS["lists"])
    containers: RegionSummary = RegionSummary(description=CONTENT_REGIONS["containers"])
    section_blocks: RegionSummary = RegionSummary(description=CONTENT_REGIONS["section_blocks"])
    articles: RegionSummary = RegionSummary(description=CONTENT_REGIONS["articles"])


class LayoutPatterns(_Frozen):
    body: LayoutKind = "other"
    header: LayoutKind = "other"
    main: LayoutKind = "other"


class WebsiteSnapshot(_Frozen):
    title: str = ""
    source_url: str = ""
    color_palette: tuple[str, ...] = ()
    typography: Typography = Typography()
    spacing: Spacing = Spacing()
    hierarchy: Hierarchy = Hierarchy()
    sections: tuple[SectionDescriptor, ...] = ()
    navigation_links: tuple[NavigationLink, ...] = ()
    structure: StructureCounts = StructureCounts()
    content: ContentCounts = ContentCounts()
    layout_patterns: LayoutPatterns = LayoutPatterns()


@dataclass
class RawExtraction:
    """Unbounded sampler output. Only normalize() should read this."""

    title: str = ""
    url: str = ""
    colors: list = field(default_factory=list)
    fonts: list = field(default_factory=list)
    font_sizes: list = field(default_factory=list)
    font_weights: list = field(default_factory=list)
    paddings: list = field(default_factory=list)
    margins: list = field(default_factory=list)
    gaps: list = field(default_factory=list)
    hierarchy: Hierarchy = field(default_factory=Hierarchy)
    sections: list = field(default_factory=list)
    navigation_links: list = field(default_factory=list)
    regions: dict = field(default_factory=dict)
    content: dict = field(default_factory=dict)
    layout_patterns: LayoutPatterns = field(default_factory=LayoutPatterns)


def _unique(values: Iterable[str], limit: int) -> tuple[str, ...]:
    """First `limit` distinct non-empty values, in first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        if not value or value in seen:
            continue
        seen[value] = None
        if len(seen) >= limit:
            break
    return tuple(seen)


def _cap_region(summary: RegionSummary) -> RegionSummary:
    limit = CAPS["region_samples"]
    if len(summary.samples) <= limit:
        return summary
    return summary.model_copy(update={"samples": summary.samples[:limit]})


def normalize(raw: RawExtraction) -> WebsiteSnapshot:
    """Deduplicate and cap every raw collection, preserving order."""
    sections = tuple(raw.sections[: CAPS["sections"]])
    navigation_links = tuple(raw.navigation_links[: CAPS["navigation_links"]])

    structure = StructureCounts(**{
        key: _cap_region(summary) for key, summary in raw.regions.items() if key in REGIONS
    })
    content = ContentCounts(**{
        key: _cap_region(summary) for key, summary in raw.content.items() if key in CONTENT_REGIONS
    })

    return WebsiteSnapshot(
        title=raw.title,
        source_url=raw.url,
        color_palette=_unique(raw.colors, CAPS["colors"]),
        typography=Typography(
            fonts=_unique(raw.fonts, CAPS["fonts"]),
            sizes=_unique(raw.font_sizes, CAPS["font_sizes"]),
            weights=_unique(raw.font_weights, CAPS["font_weights"]),
        ),
        spacing=Spacing(
            paddings=_unique(raw.paddings, CAPS["paddings"]),
            margins=_unique(raw.margins, CAPS["margins"]),
            gaps=_unique(raw.gaps, CAPS["gaps"]),
        ),
        hierarchy=raw.hierarchy,
        sections=sections,
        navigation_links=navigation_links,
        structure=structure,
        content=content,
        layout_patterns=raw.layout_patterns,
    )
