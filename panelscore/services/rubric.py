import re

from ..extensions import db
from ..models.candidate import Candidate
from ..models.category import EvaluationCategory
from ..models.item import EvaluationItem

_CODE_RE = re.compile(r'^(\D+)(\d+)$')


def next_sort_order(model, **filters):
    """max(sort_order) + 1 over rows matching ``filters``; 1 for an empty table."""
    current = db.session.query(db.func.max(model.sort_order)).filter_by(**filters).scalar()
    return (current or 0) + 1


def next_candidate_sort_order():
    return next_sort_order(Candidate)


def next_category_sort_order():
    return next_sort_order(EvaluationCategory)


def next_item_code(category):
    """Next code in the ``<category_code><n>`` sequence, e.g. A1, A2, ..."""
    pattern = re.compile(rf'^{re.escape(category.category_code)}(\d+)$')
    numbers = []
    for item in EvaluationItem.query.filter_by(category_id=category.id).all():
        m = pattern.match(item.item_code or '')
        if m:
            numbers.append(int(m.group(1)))
    return f"{category.category_code}{max(numbers) + 1 if numbers else 1}"


def next_item_sort_order(category_id):
    return next_sort_order(EvaluationItem, category_id=category_id)


def _code_key(item):
    m = _CODE_RE.match(item.item_code or '')
    if m:
        return (0, m.group(1), int(m.group(2)), item.sort_order)
    # codes outside the pattern go last, in their existing order
    return (1, '', 0, item.sort_order)


def reorder_items_by_category():
    """Renumber sort_order within each category following item codes (A1, A2, A10).

    Returns the number of rows changed. Caller commits.
    """
    changed = 0
    for category in EvaluationCategory.query.all():
        ordered = sorted(category.items, key=_code_key)
        for idx, item in enumerate(ordered, start=1):
            if item.sort_order != idx:
                item.sort_order = idx
                changed += 1
    db.session.flush()
    return changed
