from panelscore import create_app

app = create_app()
