from governance_processor.cli import app

app()
