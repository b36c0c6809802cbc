import csv
import io

RESULT_HEADERS = ["순위", "이름", "부서", "직급", "평균점수", "최대점수", "백분율", "평가위원수"]


def results_csv(results) -> bytes:
    """Ranked results as UTF-8 CSV (with BOM so spreadsheet apps detect the encoding)."""
    text_buf = io.StringIO()
    writer = csv.writer(text_buf)
    writer.writerow(RESULT_HEADERS)
    for r in results:
        c = r.candidate
        writer.writerow([
            r.rank,
            c.name,
            c.department or '',
            c.position or '',
            f"{r.average_score:.2f}",
            f"{r.max_possible_score:g}",
            f"{r.percentage:.2f}",
            r.evaluator_count,
        ])
    return ('\ufeff' + text_buf.getvalue()).encode('utf-8')
