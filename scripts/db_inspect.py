import os, sqlite3, sys

DBS = [
    os.path.join(os.getcwd(), 'panelscore.db'),
    os.path.join(os.getcwd(), 'instance', 'panelscore.db'),
]

def inspect(db):
    print(f"\n=== {db} ===")
    if not os.path.exists(db):
        print("missing")
        return
    conn = sqlite3.connect(db)
    cur = conn.cursor()
    def q(sql, params=()):
        cur.execute(sql, params)
        return cur.fetchall()
    try:
        print('candidates:', q('select id,name,sort_order,is_active from candidates order by sort_order,id'))
        print('evaluators:', q('select id,name,is_active from evaluators order by name'))
        print('categories:', q('select id,category_code,category_name,is_active from evaluation_categories order by sort_order'))
        print('items:', q('select id,category_id,item_code,max_score,weight,is_active from evaluation_items order by category_id,sort_order'))
        print('scores (final/draft):', q('select is_final,count(*) from scores group by is_final'))
        print('progress:', q('select evaluator_id,candidate_id,completed_items,total_items,progress_percentage,is_submitted from evaluation_progress order by evaluator_id,candidate_id'))
        # pairs whose scores are final but progress is not submitted
        print('inconsistent pairs:', q(
            'select distinct s.evaluator_id,s.candidate_id from scores s '
            'left join evaluation_progress p on p.evaluator_id=s.evaluator_id and p.candidate_id=s.candidate_id '
            'where s.is_final=1 and coalesce(p.is_submitted,0)=0'))
    except sqlite3.Error as e:
        print('error:', e)
    finally:
        conn.close()

if __name__ == '__main__':
    targets = sys.argv[1:] or DBS
    for db in targets:
        inspect(db)
    print('\nDone.')
