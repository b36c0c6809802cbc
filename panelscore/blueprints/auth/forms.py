from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SelectField, SubmitField
from wtforms.validators import DataRequired, Email, EqualTo, Length

class AdminSignupForm(FlaskForm):
    email = StringField("관리자 이메일", validators=[DataRequired(), Email()])
    password = PasswordField("비밀번호", validators=[DataRequired(), Length(min=8)])
    confirm = PasswordField("비밀번호 확인", validators=[DataRequired(), EqualTo('password')])
    submit = SubmitField("관리자 생성")

class AdminLoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])
    submit = SubmitField("로그인")

class EvaluatorLoginForm(FlaskForm):
    # choices are filled from active evaluators in the view
    name = SelectField("평가위원", validators=[DataRequired()], choices=[])
    password = PasswordField("비밀번호", validators=[DataRequired()])
    submit = SubmitField("로그인")
