from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField
from wtforms.validators import DataRequired, Optional, Email, Length

class EvaluatorForm(FlaskForm):
    name = StringField("이름", validators=[DataRequired(), Length(max=120)])
    email = StringField("이메일", validators=[Optional(), Email()])
    department = StringField("부서", validators=[Optional(), Length(max=120)])
    # blank on create: default password; blank on edit: unchanged
    password = PasswordField("비밀번호", validators=[Optional(), Length(min=4)])
    submit = SubmitField("저장")
