import io

from conftest import login_admin, login_evaluator
from panelscore.extensions import db
from panelscore.models.admin import Admin
from panelscore.models.candidate import Candidate
from panelscore.models.progress import EvaluationProgress
from panelscore.models.score import Score


def _progress(app, ev_id, cand_id):
    with app.app_context():
        return EvaluationProgress.query.filter_by(evaluator_id=ev_id, candidate_id=cand_id).first()


def test_home_and_public_results(client, seed):
    assert client.get('/').status_code == 200
    resp = client.get('/results')
    assert resp.status_code == 200
    assert '김철수' in resp.get_data(as_text=True)


def test_admin_pages_require_login(client, seed):
    resp = client.get('/admin/')
    assert resp.status_code == 302
    assert '/auth/admin/login' in resp.headers['Location']


def test_admin_login_and_dashboard(client, seed):
    resp = login_admin(client)
    assert resp.status_code == 302
    resp = client.get('/admin/')
    assert resp.status_code == 200
    assert '관리자 대시보드' in resp.get_data(as_text=True)


def test_wrong_admin_password(client, seed):
    resp = client.post('/auth/admin/login', data={'email': 'admin@example.com', 'password': 'nope'})
    assert resp.status_code == 200
    assert '올바르지 않습니다' in resp.get_data(as_text=True)


def test_evaluator_cannot_open_admin_pages(client, seed):
    login_evaluator(client)
    assert client.get('/admin/candidates').status_code == 403


def test_first_admin_signup_then_closed(client, app):
    resp = client.post('/auth/admin/signup', data={
        'email': 'first@example.com', 'password': 'longenough', 'confirm': 'longenough',
    })
    assert resp.status_code == 302
    with app.app_context():
        assert Admin.query.count() == 1
    assert client.get('/auth/admin/signup').status_code == 403


def test_evaluation_draft_then_final(client, app, seed):
    ev, cand = seed.evaluator_ids[0], seed.candidate_ids[0]
    i1, i2 = seed.item_ids
    login_evaluator(client)

    resp = client.post(f'/evaluator/start/{cand}')
    assert resp.status_code == 302
    assert _progress(app, ev, cand).progress_percentage == 0

    resp = client.post(f'/evaluator/form/{cand}', data={f'score_{i1}': '8', f'score_{i2}': '', 'save_draft': '임시 저장'})
    assert resp.status_code == 302
    p = _progress(app, ev, cand)
    assert p.progress_percentage == 50
    assert not p.is_submitted

    resp = client.post(f'/evaluator/form/{cand}', data={
        f'score_{i1}': '8', f'score_{i2}': '15', 'general_comment': '우수함', 'submit_final': '평가 완료',
    })
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/evaluator/')
    p = _progress(app, ev, cand)
    assert p.is_submitted
    assert p.progress_percentage == 100
    assert p.general_comment == '우수함'

    # locked after submission
    client.post(f'/evaluator/form/{cand}', data={f'score_{i1}': '1', 'save_draft': '임시 저장'})
    with app.app_context():
        s = Score.query.filter_by(evaluator_id=ev, candidate_id=cand, item_id=i1).one()
        assert s.score == 8
        assert s.is_final

    page = client.get(f'/evaluator/form/{cand}').get_data(as_text=True)
    assert '수정할 수 없습니다' in page


def test_out_of_range_score_is_flashed(client, app, seed):
    cand = seed.candidate_ids[0]
    login_evaluator(client)
    resp = client.post(f'/evaluator/form/{cand}', data={f'score_{seed.item_ids[0]}': '11', 'save_draft': '임시 저장'})
    assert resp.status_code == 200
    assert '이하로 입력하세요' in resp.get_data(as_text=True)
    with app.app_context():
        assert Score.query.count() == 0


def test_non_numeric_score_is_flashed(client, seed):
    login_evaluator(client)
    resp = client.post(f'/evaluator/form/{seed.candidate_ids[0]}', data={f'score_{seed.item_ids[0]}': 'abc', 'save_draft': '임시 저장'})
    assert resp.status_code == 200
    assert '숫자로 입력하세요' in resp.get_data(as_text=True)


def test_missing_or_inactive_candidate_shows_not_found(client, app, seed):
    login_evaluator(client)
    resp = client.get('/evaluator/form/9999')
    assert resp.status_code == 404
    assert '찾을 수 없습니다' in resp.get_data(as_text=True)
    with app.app_context():
        db.session.get(Candidate, seed.candidate_ids[1]).is_active = False
        db.session.commit()
    assert client.get(f'/evaluator/form/{seed.candidate_ids[1]}').status_code == 404
    assert client.post(f'/evaluator/start/{seed.candidate_ids[1]}').status_code == 404


def test_evaluator_dashboard_lists_active_candidates(client, seed):
    login_evaluator(client)
    page = client.get('/evaluator/').get_data(as_text=True)
    assert '김철수' in page and '이영희' in page
    assert '완료 0 / 2' in page


def test_results_and_csv_export(client, app, seed):
    ev, cand = seed.evaluator_ids[0], seed.candidate_ids[1]
    i1, i2 = seed.item_ids
    login_evaluator(client)
    client.post(f'/evaluator/form/{cand}', data={f'score_{i1}': '10', f'score_{i2}': '20', 'submit_final': '평가 완료'})
    client.post('/auth/logout')

    login_admin(client)
    page = client.get('/admin/results').get_data(as_text=True)
    assert '100.00%' in page
    assert client.get(f'/admin/results/{cand}').status_code == 200
    assert client.get('/admin/results/9999').status_code == 404
    assert client.get('/admin/results/progress').status_code == 200
    assert client.get('/admin/results/report').status_code == 200

    resp = client.get('/admin/results/export.csv')
    assert resp.status_code == 200
    body = resp.data.decode('utf-8')
    assert body.startswith('\ufeff순위,이름')
    first = body.splitlines()[1].split(',')
    assert first[0] == '1' and first[1] == '이영희'
    assert first[6] == '100.00'


def test_candidate_crud_and_upload(client, app, seed):
    login_admin(client)
    resp = client.post('/admin/candidates/create', data={'name': '최신입', 'department': '영업팀'})
    assert resp.status_code == 302
    with app.app_context():
        c = Candidate.query.filter_by(name='최신입').one()
        assert c.sort_order == 3
        cid = c.id

    client.post(f'/admin/candidates/{cid}/toggle')
    with app.app_context():
        assert db.session.get(Candidate, cid).is_active is False

    data = {'file': (io.BytesIO('이름,부서\n정업로드,총무팀\n'.encode('utf-8')), 'c.csv'), 'mode': 'append'}
    resp = client.post('/admin/candidates/upload', data=data, content_type='multipart/form-data')
    assert resp.status_code == 302
    with app.app_context():
        assert Candidate.query.filter_by(name='정업로드').one().sort_order == 4

    client.post(f'/admin/candidates/{cid}/delete')
    with app.app_context():
        assert db.session.get(Candidate, cid) is None


def test_rubric_next_code_and_item_create(client, app, seed):
    login_admin(client)
    resp = client.get(f'/admin/items/next-code?category_id={seed.category_id}')
    assert resp.get_json() == {'item_code': 'A3', 'sort_order': 3}
    assert client.get('/admin/items/next-code').status_code == 404

    resp = client.post('/admin/items/create', data={
        'category_id': str(seed.category_id), 'item_name': '리더십', 'max_score': '0', 'weight': '1',
    })
    assert resp.status_code == 302
    from panelscore.models.item import EvaluationItem
    with app.app_context():
        item = EvaluationItem.query.filter_by(item_name='리더십').one()
        assert item.item_code == 'A3'
        assert item.max_score == 0


def test_settings_title_and_reset(client, app, seed):
    login_admin(client)
    client.post('/admin/settings/title', data={'evaluation_title': '2026 승진 심사'})
    assert '2026 승진 심사' in client.get('/').get_data(as_text=True)

    resp = client.post('/admin/settings/reset', data={'confirm_text': '아니오'})
    assert resp.status_code == 200
    with app.app_context():
        assert Candidate.query.count() == 2

    client.post('/admin/settings/reset', data={'confirm_text': '초기화'})
    with app.app_context():
        assert Candidate.query.count() == 0
        assert Admin.query.count() == 1


def test_logout_requires_post(client, seed):
    login_admin(client)
    assert client.get('/auth/logout').status_code == 405
    resp = client.post('/auth/logout')
    assert resp.status_code == 302
    assert client.get('/admin/').status_code == 302


def test_item_form_rejects_non_finite_numbers(client, app, seed):
    login_admin(client)
    from panelscore.models.item import EvaluationItem
    for field, value in (('weight', 'inf'), ('max_score', 'inf'), ('weight', 'nan')):
        data = {'category_id': str(seed.category_id), 'item_name': '무한', 'max_score': '10', 'weight': '1'}
        data[field] = value
        resp = client.post('/admin/items/create', data=data)
        assert resp.status_code == 200
        assert '유한한 숫자를 입력하세요' in resp.get_data(as_text=True)
    with app.app_context():
        assert EvaluationItem.query.filter_by(item_name='무한').count() == 0


def test_clearing_general_comment_removes_it(client, app, seed):
    ev, cand = seed.evaluator_ids[0], seed.candidate_ids[0]
    i1 = seed.item_ids[0]
    login_evaluator(client)
    client.post(f'/evaluator/form/{cand}', data={f'score_{i1}': '5', 'general_comment': '보완 필요', 'save_draft': '임시 저장'})
    assert _progress(app, ev, cand).general_comment == '보완 필요'
    client.post(f'/evaluator/form/{cand}', data={f'score_{i1}': '5', 'general_comment': '', 'save_draft': '임시 저장'})
    assert _progress(app, ev, cand).general_comment is None


def test_explicit_zero_sort_order_is_saved(client, app, seed):
    login_admin(client)
    cand = seed.candidate_ids[1]
    resp = client.post(f'/admin/candidates/{cand}/edit', data={'name': '이영희', 'sort_order': '0'})
    assert resp.status_code == 302
    client.post('/admin/candidates/create', data={'name': '맨앞', 'sort_order': '0'})
    with app.app_context():
        assert db.session.get(Candidate, cand).sort_order == 0
        assert Candidate.query.filter_by(name='맨앞').one().sort_order == 0


def test_signup_commit_failure_is_reported(client, app, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.orm import Session

    def failing_commit(self):
        raise OperationalError('INSERT', {}, Exception('disk full'))

    monkeypatch.setattr(Session, 'commit', failing_commit)
    resp = client.post('/auth/admin/signup', data={
        'email': 'first@example.com', 'password': 'longenough', 'confirm': 'longenough',
    })
    assert resp.status_code == 200
    assert '관리자 계정을 만들지 못했습니다' in resp.get_data(as_text=True)
    monkeypatch.undo()
    with app.app_context():
        assert Admin.query.count() == 0
