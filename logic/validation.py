# logic/validation.py
import re

from logic.form_steps import NUMERIC_FIELDS, field_label
from logic.score_engine import NUMBER_PATTERN

_NUMBER = re.compile(rf"^\s*{NUMBER_PATTERN}\s*$")


def find_invalid_fields(answers: dict) -> dict[str, str]:
    """
    Flags numeric answers that were filled in but are not plain numbers,
    and numbers below zero. Returns {field_name: message}. Advisory only:
    scoring still falls back to the field's default for unparsable values.
    """
    invalid = {}
    for name in NUMERIC_FIELDS:
        raw = str(answers.get(name) or "").strip()
        if not raw:
            continue
        if not _NUMBER.match(raw):
            invalid[name] = f"{field_label(name)}: “{raw}” is not a number, a default will be used."
        elif float(raw) < 0:
            invalid[name] = f"{field_label(name)}: negative values make the estimate unreliable."
    return invalid
