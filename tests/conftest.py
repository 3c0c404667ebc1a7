import os
import pathlib

FIXTURES = pathlib.Path(__file__).parent / "fixtures"

os.environ.setdefault("LODGING_BACKEND", "contentful")
os.environ.setdefault("LODGING_SEED_PATH", str(FIXTURES / "seed_lodgings.json"))
os.environ.setdefault("LODGING_REQUEST_TIMEOUT", "5")
