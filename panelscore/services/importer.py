"""Spreadsheet upload for candidates, evaluators and the rubric.

Accepts .xlsx (first sheet, header row first) and .csv. Column headers may be
given in English or Korean; see the alias tables below.
"""
import csv
import io
import math
import zipfile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from flask import current_app

from ..errors import ImportFormatError
from ..extensions import db
from ..models.candidate import Candidate
from ..models.category import EvaluationCategory
from ..models.evaluator import Evaluator
from ..models.item import EvaluationItem
from .rubric import next_candidate_sort_order

CANDIDATE_ALIASES = {
    'name': ('name', '이름', '성명'),
    'department': ('department', '부서', '소속'),
    'position': ('position', '직급', '직책'),
    'category': ('category', '분류', '카테고리'),
    'description': ('description', '설명', '비고'),
}

EVALUATOR_ALIASES = {
    'name': ('name', '이름', '성명'),
    'email': ('email', '이메일'),
    'department': ('department', '부서', '소속'),
    'password': ('password', '비밀번호'),
}

CATEGORY_ALIASES = {
    'category_code': ('category_code', '카테고리코드'),
    'category_name': ('category_name', '카테고리명'),
    'description': ('description', '설명'),
    'sort_order': ('sort_order', '순서'),
}

ITEM_ALIASES = {
    'category_code': ('category_code', '카테고리코드'),
    'item_code': ('item_code', '항목코드'),
    'item_name': ('item_name', '항목명'),
    'description': ('description', '설명'),
    'max_score': ('max_score', '최대점수'),
    'weight': ('weight', '가중치'),
    'sort_order': ('sort_order', '순서'),
}


def _read_xlsx(data: bytes):
    try:
        wb = openpyxl.load_workbook(filename=io.BytesIO(data), read_only=True, data_only=True)
    except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError) as e:
        raise ImportFormatError(f'엑셀 파일을 읽을 수 없습니다: {e}') from e
    sheet = wb[wb.sheetnames[0]]
    rows = list(sheet.iter_rows(values_only=True))
    wb.close()
    if not rows:
        return []
    headers = [str(h).strip() if h is not None else '' for h in rows[0]]
    out = []
    for r in rows[1:]:
        if r is None or all(c is None or str(c).strip() == '' for c in r):
            continue
        out.append({h: v for h, v in zip(headers, r) if h})
    return out


def _read_csv(data: bytes):
    try:
        text = data.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ImportFormatError('CSV 파일은 UTF-8 이어야 합니다') from e
    reader = csv.DictReader(io.StringIO(text))
    return [{(k or '').strip(): v for k, v in row.items()} for row in reader if any((v or '').strip() for v in row.values() if isinstance(v, str))]


def read_rows(filename: str, data: bytes):
    """Parse an uploaded file into a list of header->value dicts."""
    name = (filename or '').lower()
    if name.endswith('.xlsx'):
        rows = _read_xlsx(data)
    elif name.endswith('.csv'):
        rows = _read_csv(data)
    else:
        raise ImportFormatError('지원하지 않는 파일 형식입니다 (.xlsx, .csv)')
    limit = current_app.config.get('UPLOAD_MAX_ROWS', 1000)
    if len(rows) > limit:
        raise ImportFormatError(f'행 수가 너무 많습니다 ({len(rows)} > {limit})')
    return rows


def _pick(row, aliases, key, default=None):
    for alias in aliases[key]:
        v = row.get(alias)
        if v is None:
            continue
        if isinstance(v, str):
            v = v.strip()
            if v == '':
                continue
        return v
    return default


def _text(v):
    return None if v is None else str(v)


def _number(v, default, cast=float):
    if v is None:
        return default
    try:
        n = cast(v)
    except (TypeError, ValueError) as e:
        raise ImportFormatError(f'숫자가 아닙니다: {v!r}') from e
    if not math.isfinite(n):
        raise ImportFormatError(f'유한한 숫자가 아닙니다: {v!r}')
    return n


def map_candidate_rows(rows):
    out = []
    for row in rows:
        name = _pick(row, CANDIDATE_ALIASES, 'name')
        if not name:
            continue
        out.append({k: _text(_pick(row, CANDIDATE_ALIASES, k)) for k in CANDIDATE_ALIASES} | {'name': str(name)})
    return out


def import_candidates(rows, mode='append'):
    """Insert candidates. ``overwrite`` deletes existing candidates first. Caller commits."""
    if mode not in ('append', 'overwrite'):
        raise ValueError(f'unknown upload mode: {mode}')
    data = map_candidate_rows(rows)
    if mode == 'overwrite':
        # scores/progress rows follow via FK cascade on PostgreSQL; delete explicitly for SQLite
        from ..models.score import Score
        from ..models.progress import EvaluationProgress
        Score.query.delete()
        EvaluationProgress.query.delete()
        Candidate.query.delete()
        db.session.flush()
    start = next_candidate_sort_order()
    for idx, d in enumerate(data):
        db.session.add(Candidate(sort_order=start + idx, **d))
    db.session.flush()
    current_app.logger.info('Imported %d candidates (mode=%s)', len(data), mode)
    return len(data)


def import_evaluators(rows, default_password=None):
    """Insert evaluators; existing names are skipped. Returns (created, skipped)."""
    default_password = default_password or current_app.config['DEFAULT_EVALUATOR_PASSWORD']
    existing = {e.name for e in Evaluator.query.all()}
    created = skipped = 0
    for row in rows:
        name = _pick(row, EVALUATOR_ALIASES, 'name')
        if not name:
            continue
        name = str(name)
        if name in existing:
            skipped += 1
            continue
        ev = Evaluator(
            name=name,
            email=_text(_pick(row, EVALUATOR_ALIASES, 'email')),
            department=_text(_pick(row, EVALUATOR_ALIASES, 'department')),
        )
        ev.set_password(str(_pick(row, EVALUATOR_ALIASES, 'password', default_password)))
        db.session.add(ev)
        existing.add(name)
        created += 1
    db.session.flush()
    current_app.logger.info('Imported %d evaluators (%d skipped)', created, skipped)
    return created, skipped


def import_rubric(rows):
    """Insert categories and items from one sheet.

    Rows with an ``item_code`` are items; rows with only a ``category_code``
    are categories. An item's category is taken from its ``category_code``
    column, or else from the letters before the number in its item code.
    Returns (categories_created, items_created).
    """
    categories = {c.category_code: c for c in EvaluationCategory.query.all()}
    cat_rows = [r for r in rows if _pick(r, CATEGORY_ALIASES, 'category_code') and not _pick(r, ITEM_ALIASES, 'item_code')]
    item_rows = [r for r in rows if _pick(r, ITEM_ALIASES, 'item_code')]

    cats_created = 0
    next_order = (max((c.sort_order for c in categories.values()), default=0)) + 1
    for r in cat_rows:
        code = str(_pick(r, CATEGORY_ALIASES, 'category_code'))
        if code in categories:
            continue
        order = _number(_pick(r, CATEGORY_ALIASES, 'sort_order'), 0, int) or next_order
        cat = EvaluationCategory(
            category_code=code,
            category_name=_text(_pick(r, CATEGORY_ALIASES, 'category_name', code)),
            description=_text(_pick(r, CATEGORY_ALIASES, 'description')),
            sort_order=order,
        )
        db.session.add(cat)
        categories[code] = cat
        next_order = max(next_order, order) + 1
        cats_created += 1
    db.session.flush()

    items_created = 0
    for r in item_rows:
        item_code = str(_pick(r, ITEM_ALIASES, 'item_code'))
        code = _pick(r, ITEM_ALIASES, 'category_code')
        if code is None:
            code = item_code.rstrip('0123456789')
        cat = categories.get(str(code))
        if cat is None:
            raise ImportFormatError(f'항목 {item_code}의 카테고리({code})를 찾을 수 없습니다')
        max_score = _number(_pick(r, ITEM_ALIASES, 'max_score'), 100.0)
        weight = _number(_pick(r, ITEM_ALIASES, 'weight'), 1.0)
        if max_score < 0 or weight < 0:
            raise ImportFormatError(f'항목 {item_code}: 최대점수와 가중치는 0 이상이어야 합니다')
        db.session.add(EvaluationItem(
            category_id=cat.id,
            item_code=item_code,
            item_name=_text(_pick(r, ITEM_ALIASES, 'item_name', item_code)),
            description=_text(_pick(r, ITEM_ALIASES, 'description')),
            max_score=max_score,
            weight=weight,
            sort_order=_number(_pick(r, ITEM_ALIASES, 'sort_order'), 0, int),
        ))
        items_created += 1
    db.session.flush()
    current_app.logger.info('Imported %d categories and %d items', cats_created, items_created)
    return cats_created, items_created
