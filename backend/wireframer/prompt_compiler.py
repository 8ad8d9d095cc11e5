"""
Prompt compiler: pure function from a WebsiteSnapshot to the task document
sent to the generation service.

Blocks are rendered in a fixed order. Every enumerable fact (colors, fonts,
link texts, button texts, headings, excerpts) is written out literally so the
generator has as little room for interpretation as possible. A block with
nothing to say is left out entirely.
"""

from wireframer.snapshot import ComputedStyle, SectionDescriptor, WebsiteSnapshot


def _quoted(values) -> str:
    return ", ".join(f'"{v}"' for v in values)


def _numbered(values) -> list[str]:
    return [f"  {i}. {v}" for i, v in enumerate(values, 1)]


def _header(snapshot: WebsiteSnapshot) -> list[str]:
    return [
        "ACCURATE WIREFRAME RECREATION REQUEST",
        "",
        f'Website: "{snapshot.title}" ({snapshot.source_url})',
    ]


def _typography(snapshot: WebsiteSnapshot) -> list[str]:
    t = snapshot.typography
    if not (t.fonts or t.sizes or t.weights):
        return []
    lines = ["TYPOGRAPHY SYSTEM (use these exact values):"]
    if t.fonts:
        lines.append("- Font families:")
        lines.extend(_numbered(t.fonts))
    if t.sizes:
        lines.append(f"- Font sizes: {', '.join(t.sizes)}")
    if t.weights:
        lines.append(f"- Font weights: {', '.join(t.weights)}")
    return lines


def _style_line(style: ComputedStyle) -> str:
    parts = [
        f"font-size {style.font_size}" if style.font_size else "",
        f"weight {style.font_weight}" if style.font_weight else "",
        f"line-height {style.line_height}" if style.line_height else "",
        f"color {style.color}" if style.color else "",
        f"font-family {style.font_family}" if style.font_family else "",
    ]
    return ", ".join(p for p in parts if p)


def _hierarchy(snapshot: WebsiteSnapshot) -> list[str]:
    h = snapshot.hierarchy
    lines = []
    for tag in ("h1", "h2", "h3"):
        profile = h.level(tag)
        if not profile.count:
            continue
        entry = f"- {tag.upper()} ({profile.count} on page)"
        if profile.style:
            entry += f": {_style_line(profile.style)}"
        lines.append(entry)
    if h.body:
        lines.append(f"- Body text: {_style_line(h.body)}")
        if h.body.background_color:
            lines.append(f"- Page background: {h.body.background_color}")
    if not lines:
        return []
    return ["VISUAL HIERARCHY (match these heading styles exactly):"] + lines


def _spacing(snapshot: WebsiteSnapshot) -> list[str]:
    sp = snapshot.spacing
    lines = []
    if sp.paddings:
        lines.append(f"- Paddings: {' | '.join(sp.paddings)}")
    if sp.margins:
        lines.append(f"- Margins: {' | '.join(sp.margins)}")
    if sp.gaps:
        lines.append(f"- Gaps: {' | '.join(sp.gaps)}")
    if not lines:
        return []
    return ["SPACING SYSTEM (use these exact values, not rounded approximations):"] + lines


def _layout(snapshot: WebsiteSnapshot) -> list[str]:
    lp = snapshot.layout_patterns
    return [
        "LAYOUT PATTERNS DETECTED:",
        f"- Body Layout: {lp.body}",
        f"- Header Layout: {lp.header}",
        f"- Main Layout: {lp.main}",
    ]


def _palette(snapshot: WebsiteSnapshot) -> list[str]:
    if not snapshot.color_palette:
        return []
    lines = ["ACTUAL COLOR PALETTE FROM SITE (use these, not generic grays):"]
    lines.extend(f"- Color {i}: {c}" for i, c in enumerate(snapshot.color_palette, 1))
    return lines


def _navigation(snapshot: WebsiteSnapshot) -> list[str]:
    if not snapshot.navigation_links:
        return []
    lines = ["NAVIGATION STRUCTURE (use these EXACT link texts in this EXACT order):"]
    lines.extend(
        f'{i}. "{link.text}" ({link.href})'
        for i, link in enumerate(snapshot.navigation_links, 1)
    )
    return lines


def _section(section: SectionDescriptor) -> list[str]:
    lines = [f"SECTION {section.index}:"]
    if section.heading:
        tag = f" ({section.heading_tag})" if section.heading_tag else ""
        lines.append(f'  Heading{tag}: "{section.heading}"')
    lines.append(f"  Layout: {section.layout}")
    if section.has_buttons:
        entry = f"  Buttons ({section.button_count})"
        if section.button_texts:
            entry += f": {_quoted(section.button_texts)}"
        lines.append(entry)
    if section.has_images:
        entry = f"  Images: {section.image_count} image(s)"
        if section.image_alts:
            entry += f", alt texts {_quoted(section.image_alts)}"
        lines.append(entry)
    if section.has_links:
        entry = f"  Links: {section.link_count} link(s)"
        if section.link_texts:
            entry += f": {_quoted(section.link_texts)}"
        lines.append(entry)
    if section.has_forms:
        lines.append(f"  Forms: {section.form_element_count} form element(s)")
    if section.has_lists:
        lines.append(f"  Lists: {section.list_count}")
    for sample in section.paragraph_samples:
        lines.append(f'  Text: "{sample}"')
    style = section.style
    if style:
        if style.background_color:
            lines.append(f"  Background: {style.background_color}")
        if style.padding:
            lines.append(f"  Padding: {style.padding}")
        if style.gap and style.gap != "normal":
            lines.append(f"  Gap: {style.gap}")
        if section.layout == "grid" and style.grid_template_columns:
            lines.append(f"  Grid columns: {style.grid_template_columns}")
        if section.layout == "flexbox" and style.flex_direction:
            lines.append(f"  Flex direction: {style.flex_direction}")
    box = section.bounding_box
    if box.width or box.height:
        lines.append(f"  Size: {round(box.width)}x{round(box.height)}px")
    return lines


def _sections(snapshot: WebsiteSnapshot) -> list[str]:
    if not snapshot.sections:
        return []
    lines = ["DETAILED SECTIONS (recreate each accurately, in this order):"]
    for section in snapshot.sections:
        lines.append("")
        lines.extend(_section(section))
    return lines


def _components(snapshot: WebsiteSnapshot) -> list[str]:
    st = snapshot.structure
    parts = []
    if st.buttons.count:
        parts.append(f"{st.buttons.count} buttons")
    if st.forms.count:
        parts.append(f"{st.forms.count} forms")
    if st.images.count:
        parts.append(f"{st.images.count} images")
    if not parts:
        return []
    lines = ["COMPONENT SUMMARY:", ", ".join(parts)]
    if st.header.count and st.header.samples:
        lines.append(f"Header content: {' | '.join(st.header.samples)}")
    return lines


def _footer(snapshot: WebsiteSnapshot) -> list[str]:
    footer = snapshot.structure.footer
    if not footer.count:
        return []
    lines = [f"FOOTER: {footer.description}"]
    if footer.samples:
        lines.append(f"  Content: {' | '.join(footer.samples)}")
    return lines


def _rules(snapshot: WebsiteSnapshot) -> list[str]:
    lp = snapshot.layout_patterns
    rules = [
        "Use the EXACT heading, paragraph and button texts from each section",
        f"Match the layout patterns ({lp.body}, {lp.header}, {lp.main})",
        "Use the EXACT spacing values listed above",
        f"Preserve the section order and include all {len(snapshot.sections)} sections identified",
    ]
    if snapshot.navigation_links:
        rules.insert(0, "Use the EXACT navigation link texts provided above, in the same order")
    if snapshot.color_palette:
        rules.append("Use the EXACT color palette above; do not substitute generic grays")
    if snapshot.typography.fonts:
        rules.append("Use the EXACT font families above; do not fall back to Arial or Helvetica")
    return ["ACCURACY REQUIREMENTS:"] + [f"{i}. {r}" for i, r in enumerate(rules, 1)]


BLOCKS = (
    _header,
    _typography,
    _hierarchy,
    _spacing,
    _layout,
    _palette,
    _navigation,
    _sections,
    _components,
    _footer,
    _rules,
)


def compile_prompt(snapshot: WebsiteSnapshot) -> str:
    """Render the task document for `snapshot`. Same snapshot, same bytes."""
    blocks = [block(snapshot) for block in BLOCKS]
    return "\n\n".join("\n".join(lines) for lines in blocks if lines) + "\n"


def preview(document: str, limit: int = 500) -> str:
    """Truncated copy of the document for the response envelope."""
    if len(document) <= limit:
        return document
    return document[:limit] + "..."
