from panelscore.extensions import db
from panelscore.models.category import EvaluationCategory
from panelscore.models.item import EvaluationItem
from panelscore.services.rubric import (
    next_candidate_sort_order, next_item_code, next_item_sort_order, reorder_items_by_category,
)


def test_next_item_code_continues_sequence(ctx, seed):
    cat = db.session.get(EvaluationCategory, seed.category_id)
    assert next_item_code(cat) == 'A3'
    assert next_item_sort_order(cat.id) == 3


def test_next_item_code_for_empty_category(ctx):
    cat = EvaluationCategory(category_code='B', category_name='태도', sort_order=1)
    db.session.add(cat)
    db.session.flush()
    assert next_item_code(cat) == 'B1'


def test_next_candidate_sort_order(ctx, seed):
    assert next_candidate_sort_order() == 3


def test_reorder_follows_numeric_code_order(ctx, seed):
    cat = db.session.get(EvaluationCategory, seed.category_id)
    db.session.add(EvaluationItem(category_id=cat.id, item_code='A10', item_name='열번째', sort_order=0))
    db.session.add(EvaluationItem(category_id=cat.id, item_code='A3', item_name='세번째', sort_order=99))
    db.session.flush()
    db.session.expire(cat)
    changed = reorder_items_by_category()
    assert changed == 2
    codes = [i.item_code for i in sorted(cat.items, key=lambda i: i.sort_order)]
    assert codes == ['A1', 'A2', 'A3', 'A10']
    assert reorder_items_by_category() == 0
