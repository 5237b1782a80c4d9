from plotline import create_app

app = create_app()
