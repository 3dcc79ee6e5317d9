"""
Match-report text extractor.

Turns a pasted, loosely formatted live-score page (Spanish or English)
into pre-match 1X2 odds and a complete LiveStats record.

Parsing order:
    1. Pre-match odds block ("Pre-partido" / "Pre-match" ... "1 X 2").
    2. Header block:   <h>:<a> / (<status>) / <mm>:<ss>
    3. Live-stats section ("Estadísticas en vivo" / "Stats Live"), read
       as label / home value / away value line triples.
    4. Fallback patterns for score and minute.
    5. Merge onto the all-zero defaults.

Only blank input raises. Anything else that cannot be read is left at
its zero default.
"""
import logging
import re
from typing import Optional

from inplay.errors import EmptyInputError
from inplay.state import Extraction, LiveStats, PartialOdds, TeamPair

log = logging.getLogger("inplay.extractor")


# ═══════════════════════════════════════════════════════════════════════
#  Patterns
# ═══════════════════════════════════════════════════════════════════════

_ODDS_RE = re.compile(
    r"(?:Pre-partido|Pre-match)[\s\S]*?1\s+X\s+2[^\n\r]*\n\s*"
    r"(\d+\.\d+)\s+(\d+\.\d+)\s+(\d+\.\d+)"
)
_HEADER_RE = re.compile(r"\s*(\d+):(\d+)\s*\n\s*\(.*?\)\n\s*(\d{1,2}):\d{2}")
_STATS_SECTION_RE = re.compile(r"Estadísticas en vivo|Stats Live", re.IGNORECASE)

_SCORE_LABEL_RE = re.compile(r"Marcador\s*(\d+)\s*-\s*(\d+)", re.IGNORECASE)
_SCORE_PAIR_RE = re.compile(r"(\d+)\s*-\s*(\d+)(?!:)")
_MINUTE_LABEL_RE = re.compile(r"Minuto de Juego\s*(\d+)", re.IGNORECASE)
_MINUTE_CLOCK_RE = re.compile(r"(\d{1,2}):\d{2}")
_MINUTE_MARK_RE = re.compile(r"(\d{1,2})'")

_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_INT_PREFIX_RE = re.compile(r"[+-]?\d+")

# Label → LiveStats field. Checked in order with a substring test, so the
# dangerous-attack labels must come before the plain attack labels.
STAT_LABELS: tuple[tuple[str, str], ...] = (
    ("Ataques Peligrosos", "dangerous_attacks"),
    ("Dangerous Attacks", "dangerous_attacks"),
    ("Ataques", "attacks"),
    ("Attacks", "attacks"),
    ("Tiros a Portería", "on_target"),
    ("Shots On Target", "on_target"),
    ("Tiros Fuera", "off_target"),
    ("Shots Off Target", "off_target"),
    ("Córners", "corners"),
    ("Corners", "corners"),
    ("Posesión del Balón", "possession"),
    ("Ball Possession", "possession"),
    ("Tarjetas Amarillas", "yellow_cards"),
    ("Yellow Cards", "yellow_cards"),
    ("Tarjetas Rojas", "red_cards"),
    ("Red Cards", "red_cards"),
)


# ═══════════════════════════════════════════════════════════════════════
#  Lenient Number Parsing
# ═══════════════════════════════════════════════════════════════════════

def _is_numeric(line: str) -> bool:
    """True when the line starts with a number ("12", "55%", "0.5")."""
    return _FLOAT_PREFIX_RE.match(line) is not None


def _leading_int(line: str) -> int:
    """Leading integer of a line; 0 when there is none."""
    m = _INT_PREFIX_RE.match(line)
    return int(m.group(0)) if m else 0


def _match_label(line: str) -> Optional[str]:
    for label, field_name in STAT_LABELS:
        if label in line:
            return field_name
    return None


# ═══════════════════════════════════════════════════════════════════════
#  Sections
# ═══════════════════════════════════════════════════════════════════════

def _parse_odds(text: str) -> Optional[PartialOdds]:
    m = _ODDS_RE.search(text)
    if not m:
        return None
    return PartialOdds(
        home=float(m.group(1)),
        draw=float(m.group(2)),
        away=float(m.group(3)),
    )


def _parse_stats_section(text: str) -> dict:
    """Read label/home/away triples after the live-stats header."""
    found: dict = {}
    m = _STATS_SECTION_RE.search(text)
    if not m:
        return found

    lines = [ln.strip() for ln in text[m.start():].split("\n")]
    lines = [ln for ln in lines if ln]

    i = 0
    while i < len(lines):
        if (
            i + 2 < len(lines)
            and not _is_numeric(lines[i])
            and _is_numeric(lines[i + 1])
            and _is_numeric(lines[i + 2])
        ):
            field_name = _match_label(lines[i])
            if field_name is not None:
                # "Dangerous Attacks" contains "Attacks": a generic attack
                # label never replaces a recorded dangerous-attack pair.
                if not (field_name == "attacks" and "dangerous_attacks" in found):
                    found[field_name] = TeamPair(
                        _leading_int(lines[i + 1]),
                        _leading_int(lines[i + 2]),
                    )
                    log.debug("stat %-18s %s / %s  (%r)",
                              field_name, lines[i + 1], lines[i + 2], lines[i])
            i += 3
            continue
        i += 1

    return found


def _apply_fallbacks(text: str, found: dict) -> None:
    """Fill score / minute from looser patterns when the header was missing."""
    if "score" in found and found.get("minute"):
        return

    score_m = _SCORE_LABEL_RE.search(text) or _SCORE_PAIR_RE.search(text)
    minute_m = (
        _MINUTE_LABEL_RE.search(text)
        or _MINUTE_CLOCK_RE.search(text)
        or _MINUTE_MARK_RE.search(text)
    )

    if score_m and "score" not in found:
        found["score"] = TeamPair(int(score_m.group(1)), int(score_m.group(2)))
        log.debug("fallback score %s-%s", score_m.group(1), score_m.group(2))
    if minute_m and not found.get("minute"):
        found["minute"] = int(minute_m.group(1))
        log.debug("fallback minute %s", minute_m.group(1))


# ═══════════════════════════════════════════════════════════════════════
#  Entry Point
# ═══════════════════════════════════════════════════════════════════════

def extract(text: str) -> Extraction:
    """Parse a match report into odds (if present) and full live stats.

    Raises:
        EmptyInputError: If the text is blank.
    """
    if not text or not text.strip():
        raise EmptyInputError()

    odds = _parse_odds(text)

    found: dict = {}
    header = _HEADER_RE.search(text)
    if header:
        found["score"] = TeamPair(int(header.group(1)), int(header.group(2)))
        found["minute"] = int(header.group(3))

    found.update(_parse_stats_section(text))
    _apply_fallbacks(text, found)

    stats = LiveStats.merged(found)
    log.info(
        "extracted | odds=%s fields=%d | %s",
        f"{odds.home}/{odds.draw}/{odds.away}" if odds else "none",
        len(found),
        stats,
    )
    return Extraction(live_stats=stats, pre_match_odds=odds)
