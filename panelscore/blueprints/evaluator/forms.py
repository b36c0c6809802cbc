from flask_wtf import FlaskForm
from wtforms import TextAreaField, SubmitField
from wtforms.validators import Optional, Length

class EvaluationForm(FlaskForm):
    """Fixed part of the score sheet; per-item fields are named score_<id> / comment_<id>."""
    general_comment = TextAreaField("기타 의견", validators=[Optional(), Length(max=300)], render_kw={"rows": 4, "maxlength": 300})
    save_draft = SubmitField("임시 저장")
    submit_final = SubmitField("평가 완료")
