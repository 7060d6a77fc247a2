from nbpublish.cli import app

app(prog_name="nbpublish")
