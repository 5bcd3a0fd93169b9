"""Text and JSON rendering of an AnalysisResult."""

import json

from colorama import Fore, Style

from headergrade.models import Level, Status

NOTE_STYLES = {
    Level.FAIL: ("❌", Fore.RED),
    Level.WARNING: ("⚠️", Fore.YELLOW),
    Level.INFO: ("ℹ️", Fore.CYAN),
    Level.SUCCESS: ("✅", Fore.GREEN),
    Level.DETAIL: ("", Fore.WHITE),
}

STATUS_STYLES = {
    Status.PASS: ("PASS", Fore.GREEN),
    Status.PARTIAL: ("PARTIAL", Fore.YELLOW),
    Status.FAIL: ("FAIL", Fore.RED),
    Status.MISSING: ("MISSING", Fore.RED),
    Status.UNKNOWN: ("UNKNOWN", Fore.WHITE),
}


def format_note(note, color=True):
    glyph, fore = NOTE_STYLES[note.level]
    text = f"{glyph} {note.message}" if glyph else note.message
    return f"{fore}{text}{Style.RESET_ALL}" if color else text


def score_color(score):
    if score >= 75:
        return Fore.GREEN
    if score >= 50:
        return Fore.YELLOW
    return Fore.RED


def header_banner(text, color=True):
    """Text as a banner, 80 columns wide."""
    rule = "=" * 80
    banner = f"{rule}\n{text.center(80)}\n{rule}"
    return f"{Style.BRIGHT}{Fore.CYAN}{banner}{Style.RESET_ALL}" if color else banner


def format_text(result, source=None, verbose=False, color=True):
    """Render a result as human-readable text."""
    def paint(fore, text):
        return f"{fore}{text}{Style.RESET_ALL}" if color else text

    scored = [e for e in result.detected if e.status is not None]
    others = [e for e in result.detected if e.status is None]

    lines = [header_banner("Security Headers Analysis Summary", color)]
    if source:
        lines.append(f"Target: {source}")
    lines.append(f"Security Score: {paint(score_color(result.score), f'{result.score:.1f}/100')}")
    lines.append(f"Detected: {len(scored)}  "
                 f"Missing: {paint(Fore.RED, len(result.missing))}  "
                 f"Leaking: {paint(Fore.RED, len(result.leaking))}")

    sections = [
        ("Detected Headers", scored),
        ("Missing Headers", result.missing),
        ("Leaking Headers", result.leaking),
    ]
    for title, entries in sections:
        if not entries:
            continue
        lines.append(header_banner(title, color))
        for entry in entries:
            if entry.status is not None:
                label, fore = STATUS_STYLES[entry.status]
                lines.append(f"{paint(Fore.GREEN, entry.name)}: {paint(fore, label)} "
                             f"({entry.score_delta:+.2f} of {entry.weight:g})")
            else:
                lines.append(f"{paint(Fore.GREEN, entry.name)}: {paint(Fore.RED, 'LEAKING')} "
                             f"({entry.weight:g})")
            for note in entry.notes:
                if note.level is Level.DETAIL and not verbose:
                    continue
                lines.append(f"  {format_note(note, color)}")

    if verbose and others:
        lines.append(header_banner("Other Headers", color))
        for entry in others:
            lines.append(f"{paint(Fore.GREEN, entry.name)}: {paint(Fore.YELLOW, entry.value)}")

    return "\n".join(lines)


def format_json(result, source=None):
    data = result.to_dict()
    if source:
        data = {"target": source, **data}
    return json.dumps(data, indent=2)


def print_results(result, source=None, verbose=False, output_format="text"):
    if output_format == "json":
        print(format_json(result, source))
    else:
        print(format_text(result, source, verbose))


def export_results(result, path, source=None, output_format="text"):
    """Write the report to a file, without terminal colors."""
    with open(path, "w") as f:
        if output_format == "json":
            f.write(format_json(result, source))
        else:
            f.write(format_text(result, source, verbose=True, color=False))
        f.write("\n")
