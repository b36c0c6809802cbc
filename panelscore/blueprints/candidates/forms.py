from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired, FileAllowed
from wtforms import StringField, IntegerField, SubmitField, TextAreaField, SelectField
from wtforms.validators import DataRequired, Optional, Length, NumberRange

class CandidateForm(FlaskForm):
    name = StringField("이름", validators=[DataRequired(), Length(max=120)])
    department = StringField("부서", validators=[Optional(), Length(max=120)])
    position = StringField("직급", validators=[Optional(), Length(max=120)])
    category = StringField("분류", validators=[Optional(), Length(max=120)])
    description = TextAreaField("설명", render_kw={"rows": 3})
    # blank: append at the end
    sort_order = IntegerField("정렬순서", validators=[Optional(), NumberRange(min=0)])
    submit = SubmitField("저장")

class UploadForm(FlaskForm):
    file = FileField("파일", validators=[FileRequired(), FileAllowed(["xlsx", "csv"], "xlsx 또는 csv 파일만 가능합니다")])
    mode = SelectField("방식", choices=[("append", "기존 목록에 추가"), ("overwrite", "전체 삭제 후 업로드")], default="append")
    submit = SubmitField("업로드")
