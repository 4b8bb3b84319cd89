import typer
import requests
import os

from dragonwatch.config import setup_logging


app = typer.Typer()
BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_KEY = os.getenv("API_KEY")


def _headers():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


@app.callback()
def main(log_level: str = typer.Option("WARNING", help="Logging level")):
    setup_logging(log_level)


@app.command()
def sync(count: int = typer.Option(None, help="How many recent blocks to pull")):
    r = requests.post(f"{BASE}/sync", params={"count": count} if count else {}, headers=_headers())
    typer.echo(r.json())


@app.command()
def dragons():
    r = requests.get(f"{BASE}/dragons", headers=_headers())
    data = r.json()
    for section in ("trend", "rows"):
        typer.echo(f"[{section}]")
        for d in data.get(section, []):
            row = f" row {d['row_id']}" if d.get("row_id") else ""
            hot = " HOT" if d.get("is_hot") else ""
            typer.echo(f"  {d['rule_name']}{row} {d['type']} {d['value']} x{d['count']} "
                       f"(>= {d['threshold']}) next {d['next_height']}{hot}")


@app.command()
def road(rule_id: str, axis: str = typer.Option("parity", help="parity or size")):
    r = requests.get(f"{BASE}/roads/{rule_id}", params={"axis": axis}, headers=_headers())
    typer.echo(r.json())


@app.command()
def rules():
    r = requests.get(f"{BASE}/rules", headers=_headers())
    typer.echo(r.json())


@app.command()
def ingest(height: int, block_hash: str, timestamp: str = typer.Option("")):
    r = requests.post(f"{BASE}/blocks", json={"height": height, "hash": block_hash, "timestamp": timestamp},
                      headers=_headers())
    typer.echo(r.json())


if __name__ == "__main__":
    app()
