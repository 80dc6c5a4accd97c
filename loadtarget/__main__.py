from loadtarget.cli import app

app(prog_name="loadtarget")
