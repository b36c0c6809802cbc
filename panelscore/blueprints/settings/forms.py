from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField
from wtforms.validators import DataRequired, EqualTo, Length, AnyOf

class TitleForm(FlaskForm):
    evaluation_title = StringField("시스템 이름", validators=[DataRequired(), Length(max=200)])
    submit = SubmitField("저장")

class PasswordForm(FlaskForm):
    password = PasswordField("새 비밀번호", validators=[DataRequired(), Length(min=8)])
    confirm = PasswordField("새 비밀번호 확인", validators=[DataRequired(), EqualTo('password', message="비밀번호가 일치하지 않습니다.")])
    submit = SubmitField("변경")

class ResetForm(FlaskForm):
    confirm_text = StringField("확인 문구", validators=[DataRequired(), AnyOf(["초기화"], message="'초기화'를 입력해야 합니다.")])
    submit = SubmitField("시스템 초기화")
