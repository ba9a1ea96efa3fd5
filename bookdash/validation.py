"""Book form validation."""
import re
from datetime import date
from typing import Dict, Optional

from bookdash.models import BookDraft

MIN_YEAR = 1000

YEAR_PATTERN = re.compile(r"[0-9]+")


def parse_year(raw: str) -> Optional[int]:
    """Parse the year field; None unless it is plain ASCII digits."""
    text = str(raw).strip()
    if not YEAR_PATTERN.fullmatch(text):
        return None
    return int(text)


def validate(draft: BookDraft, current_year: Optional[int] = None) -> Dict[str, str]:
    """
    Check a draft and collect every error at once.
    
    Args:
        draft: Form contents
        current_year: Upper bound for the year (defaults to today's year)
        
    Returns:
        Mapping of field name to error message; empty when the draft is valid
    """
    if current_year is None:
        current_year = date.today().year
    
    errors = {}
    
    if not draft.title.strip():
        errors["title"] = "Title is required"
    if not draft.author.strip():
        errors["author"] = "Author is required"
    if not draft.genre:
        errors["genre"] = "Genre is required"
    
    raw_year = str(draft.published_year).strip()
    if not raw_year:
        errors["publishedYear"] = "Published year is required"
    else:
        year = parse_year(raw_year)
        if year is None or year < MIN_YEAR or year > current_year:
            errors["publishedYear"] = "Enter a valid year"
    
    return errors
