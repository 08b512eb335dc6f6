"""
Feed projectors: reshape a decoded sheet into the JSON the frontend reads.

Two layouts are supported:

- "items":    column A is a label, every other non-empty cell is content.
- "homepage": rows are sorted into fixed sections by keywords in column A.
"""

import logging

log = logging.getLogger("sheetfeed")

MEETING = "meeting"
NEWSLETTER = "newsletter"
VOLUNTEER = "volunteer"
PARTNER = "partner"


def _cell(row, headers, index):
    """Trimmed value of column `index`, or "" if the sheet has no such column."""
    if index >= len(headers):
        return ""
    return (row.get(headers[index]) or "").strip()


# ═══════════════════════════════════════
# ITEMS (label + content list)
# ═══════════════════════════════════════

def project_items(table):
    headers, rows = table
    label_col = headers[0] if headers else "Label"

    items = []
    for row in rows:
        label = (row.get(label_col) or "").strip()
        if not label:
            continue

        content = []
        for header in headers[1:]:
            value = (row.get(header) or "").strip()
            if value:
                content.append(value)

        items.append({"label": label, "content": content})

    log.info(f"Projected {len(items)} feed items")
    return {"items": items}


# ═══════════════════════════════════════
# HOMEPAGE (fixed sections)
# ═══════════════════════════════════════

def classify_label(label):
    """Map a row label to its homepage section, or None.

    Case-insensitive substring match; the order matters, e.g.
    "Volunteer Meeting Signup" is a volunteer row, not a meeting.
    """
    text = (label or "").strip().lower()
    if "next meeting" in text or ("meeting" in text and "volunteer" not in text):
        return MEETING
    if "newsletter" in text:
        return NEWSLETTER
    if "volunteer" in text:
        return VOLUNTEER
    if "partner" in text:
        return PARTNER
    return None


def empty_homepage():
    return {
        "nextMeeting": {"date": "", "time": "", "location": "", "description": ""},
        "newsletter": {"title": "", "url": ""},
        "volunteerAsks": [],
        "partners": [],
    }


def project_homepage(table):
    """Column A label, column B content, columns C-E section-specific extras."""
    headers, rows = table
    feed = empty_homepage()
    meeting = feed["nextMeeting"]
    newsletter = feed["newsletter"]

    for row in rows:
        section = classify_label(_cell(row, headers, 0))
        if section is None:
            continue

        content = _cell(row, headers, 1)
        if section == MEETING:
            meeting["description"] = content
            meeting["date"] = _cell(row, headers, 2)
            meeting["time"] = _cell(row, headers, 3)
            meeting["location"] = _cell(row, headers, 4)
        elif section == NEWSLETTER:
            newsletter["title"] = content
            newsletter["url"] = _cell(row, headers, 2)
        else:
            description = _cell(row, headers, 2)
            if not content and not description:
                continue
            entry = {"title": content, "description": description, "url": _cell(row, headers, 3)}
            key = "volunteerAsks" if section == VOLUNTEER else "partners"
            feed[key].append(entry)

    # Unlabelled sheets: assume Announcements, Next Meeting, Newsletter order
    if not meeting["description"] and len(rows) >= 2:
        log.info("No meeting row matched by label, falling back to row positions")
        meeting["description"] = _cell(rows[1], headers, 1)
        if len(rows) >= 3:
            newsletter["title"] = _cell(rows[2], headers, 1)

    log.info(
        f"Projected homepage feed ({len(feed['volunteerAsks'])} volunteer asks, "
        f"{len(feed['partners'])} partners)"
    )
    return feed


# ═══════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════

PROJECTORS = {
    "items": project_items,
    "homepage": project_homepage,
}


def get_projector(name):
    try:
        return PROJECTORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown feed policy {name!r} (expected one of: {', '.join(sorted(PROJECTORS))})"
        ) from None
