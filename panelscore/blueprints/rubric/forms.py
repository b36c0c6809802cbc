import math

from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, FloatField, SubmitField, TextAreaField, SelectField
from wtforms.validators import DataRequired, InputRequired, Optional, Length, NumberRange, Regexp, ValidationError


def finite_number(form, field):
    # FloatField parses "inf" and "nan"; both break weighted totals
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError("유한한 숫자를 입력하세요.")


class CategoryForm(FlaskForm):
    category_code = StringField("카테고리 코드", validators=[DataRequired(), Length(max=20), Regexp(r'^\D+$', message="코드에는 숫자를 쓸 수 없습니다")])
    category_name = StringField("카테고리명", validators=[DataRequired(), Length(max=120)])
    description = TextAreaField("설명", render_kw={"rows": 2})
    sort_order = IntegerField("정렬순서", validators=[Optional(), NumberRange(min=0)])
    submit = SubmitField("저장")

class ItemForm(FlaskForm):
    category_id = SelectField("카테고리", coerce=int, validators=[DataRequired()], choices=[])
    # blank: generated from the category code
    item_code = StringField("항목 코드", validators=[Optional(), Length(max=40)])
    item_name = StringField("항목명", validators=[DataRequired(), Length(max=200)])
    description = TextAreaField("설명", render_kw={"rows": 2})
    max_score = FloatField("최대점수", default=100, validators=[InputRequired(), finite_number, NumberRange(min=0)])
    weight = FloatField("가중치", default=1.0, validators=[Optional(), finite_number, NumberRange(min=0)])
    sort_order = IntegerField("정렬순서", validators=[Optional(), NumberRange(min=0)])
    submit = SubmitField("저장")
