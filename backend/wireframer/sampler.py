"""
Style & structure sampler.

SAMPLER_SCRIPT runs inside the rendered page and returns plain JSON: computed
colors, typography, spacing, heading hierarchy, per-section breakdown,
navigation links and region counts. parse_payload() turns that JSON into a
RawExtraction. Nothing here caps snapshot-level collections; that is the
normalizer's job.
"""

from typing import Any

from wireframer.errors import RenderingError
from wireframer.snapshot import (
    CONTENT_REGIONS,
    REGIONS,
    BoundingBox,
    ComputedStyle,
    HeadingProfile,
    Hierarchy,
    LayoutPatterns,
    NavigationLink,
    RawExtraction,
    RegionSummary,
    SectionDescriptor,
)

ZERO_SPACING = {"", "0px", "0px 0px", "0px 0px 0px", "0px 0px 0px 0px", "normal"}

SAMPLER_SCRIPT = '''() => {
    const getText = (el) => {
        if (!el) return '';
        const text = el.innerText || el.textContent || '';
        return text.trim().substring(0, 200);
    };

    const isTransparent = (value) =>
        !value || value === 'transparent' || value === 'rgba(0, 0, 0, 0)';

    const styleOf = (el) => {
        if (!el) return null;
        const s = getComputedStyle(el);
        return {
            display: s.display,
            position: s.position,
            width: s.width,
            height: s.height,
            padding: s.padding,
            margin: s.margin,
            gap: s.gap,
            background_color: s.backgroundColor,
            color: s.color,
            border_color: s.borderColor,
            font_size: s.fontSize,
            font_weight: s.fontWeight,
            font_family: s.fontFamily,
            line_height: s.lineHeight,
            letter_spacing: s.letterSpacing,
            text_align: s.textAlign,
            text_transform: s.textTransform,
            flex_direction: s.flexDirection,
            justify_content: s.justifyContent,
            align_items: s.alignItems,
            flex_wrap: s.flexWrap,
            grid_template_columns: s.gridTemplateColumns,
            grid_template_rows: s.gridTemplateRows,
        };
    };

    const boxOf = (el) => {
        const r = el.getBoundingClientRect();
        return { x: r.x, y: r.y, width: r.width, height: r.height };
    };

    const displayOf = (selector) => {
        const el = selector === 'body' ? document.body : document.querySelector(selector);
        return el ? getComputedStyle(el).display : null;
    };

    const region = (selector) => {
        const els = [...document.querySelectorAll(selector)];
        return {
            count: els.length,
            samples: els.slice(0, 8).map(getText).filter(t => t),
        };
    };

    // Colors, first-seen order
    const colors = new Set();
    document.querySelectorAll(
        'body, header, nav, main, footer, section, button, a, .btn, [role="button"], ' +
        'h1, h2, h3, h4, h5, h6, p, div'
    ).forEach(el => {
        const s = getComputedStyle(el);
        if (!isTransparent(s.backgroundColor)) colors.add(s.backgroundColor);
        if (!isTransparent(s.color)) colors.add(s.color);
        if (!isTransparent(s.borderColor)) colors.add(s.borderColor);
    });

    // Typography from headings and paragraphs only
    const fonts = new Set(), sizes = new Set(), weights = new Set();
    const headings = [...document.querySelectorAll('h1, h2, h3, h4, h5, h6')];
    [...headings, ...document.querySelectorAll('p')].forEach(el => {
        const s = getComputedStyle(el);
        if (s.fontFamily) fonts.add(s.fontFamily);
        if (s.fontSize) sizes.add(s.fontSize);
        if (s.fontWeight) weights.add(s.fontWeight);
    });

    // Spacing from block containers, zero values excluded
    const paddings = new Set(), margins = new Set(), gaps = new Set();
    document.querySelectorAll('section, div, header, footer, nav, main').forEach(el => {
        const s = getComputedStyle(el);
        if (s.padding && s.padding !== '0px') paddings.add(s.padding);
        if (s.margin && s.margin !== '0px') margins.add(s.margin);
        if (s.gap && s.gap !== 'normal' && s.gap !== '0px') gaps.add(s.gap);
    });

    // Heading hierarchy
    const level = (tag) => {
        const els = document.querySelectorAll(tag);
        return { count: els.length, style: els.length ? styleOf(els[0]) : null };
    };

    // Sections, document order
    const sections = [...document.querySelectorAll(
        'section, [role="region"], .section, main > div, main > article, article'
    )].map((section, idx) => {
        const heading = section.querySelector('h1, h2, h3, h4, h5, h6');
        const buttons = [...section.querySelectorAll(
            'button, .btn, [role="button"], a.button, input[type="submit"]'
        )];
        const images = [...section.querySelectorAll('img')];
        const links = [...section.querySelectorAll('a')];
        const forms = section.querySelectorAll('form, input, textarea, select');
        const paragraphs = [...section.querySelectorAll('p')];
        const lists = section.querySelectorAll('ul, ol');
        return {
            index: idx + 1,
            heading: heading ? getText(heading) : '',
            heading_tag: heading ? heading.tagName.toLowerCase() : '',
            display: getComputedStyle(section).display,
            style: styleOf(section),
            button_count: buttons.length,
            button_texts: buttons.slice(0, 5).map(getText).filter(t => t),
            image_count: images.length,
            image_alts: images.slice(0, 5).map(img => img.alt || '').filter(t => t),
            link_count: links.length,
            link_texts: links.slice(0, 5).map(getText).filter(t => t),
            form_element_count: forms.length,
            paragraph_count: paragraphs.length,
            paragraph_samples: paragraphs.slice(0, 2).map(getText).filter(t => t),
            list_count: lists.length,
            bounding_box: boxOf(section),
            class_name: typeof section.className === 'string' ? section.className : '',
            element_id: section.id || '',
        };
    });

    // Navigation: container order, then anchor order inside each container
    const navigation_links = [];
    document.querySelectorAll('nav, [role="navigation"], .navbar').forEach(nav => {
        nav.querySelectorAll('a').forEach(link => {
            const text = getText(link);
            if (text && text.length < 50) {
                navigation_links.push({
                    text: text,
                    href: link.getAttribute('href') || '#',
                    bounding_box: boxOf(link),
                    style: styleOf(link),
                });
            }
        });
    });

    return {
        title: document.title || '',
        url: window.location.href,
        colors: [...colors],
        typography: { fonts: [...fonts], sizes: [...sizes], weights: [...weights] },
        spacing: { paddings: [...paddings], margins: [...margins], gaps: [...gaps] },
        hierarchy: { h1: level('h1'), h2: level('h2'), h3: level('h3'), body: styleOf(document.body) },
        sections: sections,
        navigation_links: navigation_links,
        regions: {
            header: region('header, [role="banner"], .header, .navbar, nav'),
            main: region('main, [role="main"], .main, .content'),
            sidebar: region('aside, [role="complementary"], .sidebar'),
            footer: region('footer, [role="contentinfo"], .footer'),
            navigation: region('nav, [role="navigation"], .nav, .menu'),
            buttons: region('button, input[type="button"], input[type="submit"], .btn, [role="button"], a.button'),
            forms: region('form'),
            images: region('img'),
            links: region('a'),
        },
        content: {
            headings: region('h1, h2, h3, h4, h5, h6'),
            paragraphs: region('p'),
            lists: region('ul, ol'),
            containers: region('.container, .wrapper, .content'),
            section_blocks: region('section, .section'),
            articles: region('article, .article'),
        },
        displays: {
            body: displayOf('body'),
            header: displayOf('header, [role="banner"]'),
            main: displayOf('main, [role="main"]'),
        },
    };
}'''


def classify_layout(display: str | None) -> str:
    """Map a computed `display` value to grid > flexbox > block > other."""
    if display in ("grid", "inline-grid"):
        return "grid"
    if display in ("flex", "inline-flex"):
        return "flexbox"
    if display == "block":
        return "block"
    return "other"


def _style(data: Any) -> ComputedStyle | None:
    if not isinstance(data, dict):
        return None
    return ComputedStyle(**{k: str(v) for k, v in data.items() if v is not None})


def _texts(values: Any) -> tuple[str, ...]:
    return tuple(str(v) for v in (values or []) if v)


def _region(data: Any, description: str) -> RegionSummary:
    data = data or {}
    return RegionSummary(
        count=int(data.get("count") or 0),
        samples=_texts(data.get("samples")),
        description=description,
    )


def _section(data: dict, position: int) -> SectionDescriptor:
    return SectionDescriptor(
        index=int(data.get("index") or position),
        heading=data.get("heading") or "",
        heading_tag=data.get("heading_tag") or "",
        layout=classify_layout(data.get("display")),
        style=_style(data.get("style")),
        button_count=int(data.get("button_count") or 0),
        button_texts=_texts(data.get("button_texts"))[:5],
        image_count=int(data.get("image_count") or 0),
        image_alts=_texts(data.get("image_alts"))[:5],
        link_count=int(data.get("link_count") or 0),
        link_texts=_texts(data.get("link_texts"))[:5],
        form_element_count=int(data.get("form_element_count") or 0),
        paragraph_count=int(data.get("paragraph_count") or 0),
        paragraph_samples=tuple(p[:200] for p in _texts(data.get("paragraph_samples"))[:2]),
        list_count=int(data.get("list_count") or 0),
        bounding_box=BoundingBox(**(data.get("bounding_box") or {})),
        class_name=data.get("class_name") or "",
        element_id=data.get("element_id") or "",
    )


def _link(data: dict) -> NavigationLink:
    return NavigationLink(
        text=data.get("text") or "",
        href=data.get("href") or "#",
        bounding_box=BoundingBox(**(data.get("bounding_box") or {})),
        style=_style(data.get("style")),
    )


def parse_payload(payload: dict) -> RawExtraction:
    """
    Convert the in-page JSON into a RawExtraction.

    Any missing or null key becomes an empty collection; a page without a
    footer or nav is sparse, not broken.
    """
    payload = payload or {}
    typography = payload.get("typography") or {}
    spacing = payload.get("spacing") or {}
    hierarchy = payload.get("hierarchy") or {}
    regions = payload.get("regions") or {}
    content = payload.get("content") or {}
    displays = payload.get("displays") or {}

    def heading(tag: str) -> HeadingProfile:
        data = hierarchy.get(tag) or {}
        return HeadingProfile(count=int(data.get("count") or 0), style=_style(data.get("style")))

    return RawExtraction(
        title=payload.get("title") or "",
        url=payload.get("url") or "",
        colors=list(_texts(payload.get("colors"))),
        fonts=list(_texts(typography.get("fonts"))),
        font_sizes=list(_texts(typography.get("sizes"))),
        font_weights=list(_texts(typography.get("weights"))),
        paddings=[p for p in _texts(spacing.get("paddings")) if p not in ZERO_SPACING],
        margins=[m for m in _texts(spacing.get("margins")) if m not in ZERO_SPACING],
        gaps=[g for g in _texts(spacing.get("gaps")) if g not in ZERO_SPACING],
        hierarchy=Hierarchy(
            h1=heading("h1"),
            h2=heading("h2"),
            h3=heading("h3"),
            body=_style(hierarchy.get("body")),
        ),
        sections=[_section(s, i + 1) for i, s in enumerate(payload.get("sections") or [])],
        navigation_links=[
            _link(link) for link in payload.get("navigation_links") or [] if link.get("text")
        ],
        regions={key: _region(regions.get(key), label) for key, label in REGIONS.items()},
        content={key: _region(content.get(key), label) for key, label in CONTENT_REGIONS.items()},
        layout_patterns=LayoutPatterns(
            body=classify_layout(displays.get("body")),
            header=classify_layout(displays.get("header")),
            main=classify_layout(displays.get("main")),
        ),
    )


async def sample_page(session) -> RawExtraction:
    """Run the in-page sampler through an open rendering session."""
    try:
        payload = await session.evaluate(SAMPLER_SCRIPT)
    except RenderingError:
        raise
    except Exception as e:
        raise RenderingError(f"Page extraction failed: {e}", cause=e) from e

    raw = parse_payload(payload)
    print(
        f"  [sampler] {raw.title!r}: {len(raw.colors)} colors, "
        f"{len(raw.sections)} sections, {len(raw.navigation_links)} nav links"
    )
    return raw
