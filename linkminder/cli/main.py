"""CLI entrypoint for LinkMinder."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

import requests
import typer

app = typer.Typer(name="lnkm", help="LinkMinder command-line interface")
rules_app = typer.Typer(name="rules", help="Manage custom classification rules")
app.add_typer(rules_app, name="rules")

DEFAULT_HOST = "http://127.0.0.1:5175"
PIN_HEADER = "X-LinkMinder-Pin"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip("/")
    env_host = os.environ.get("LNKM_HOST")
    if env_host:
        return env_host.rstrip("/")
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    url = f"{_resolve_host(host)}{path}"
    resp = requests.request(method, url, timeout=30, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


def _echo(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def save(
    url: str = typer.Argument(..., help="URL to save"),
    title: Optional[str] = typer.Option(None, "--title", help="Page title"),
    selection: Optional[str] = typer.Option(None, "--selection", help="Selected text to classify with"),
    private: bool = typer.Option(False, "--private", help="Save into the private area"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Classify and store a URL."""
    body = {
        "tab": {"url": url, "title": title},
        "trigger": {"reason": "cli", "selectionText": selection, "makePrivate": private or None},
    }
    resp = _request("POST", "/links/save", host=host, json=body)
    _echo(resp.json()["record"])


@app.command("list")
def list_links(
    private: bool = typer.Option(False, "--private", help="List the private area"),
    archived: bool = typer.Option(False, "--archived", help="Include archived links"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Only links carrying this tag"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Search text"),
    pin: Optional[str] = typer.Option(None, "--pin", help="Private PIN"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """List saved links."""
    params: dict[str, object] = {"scope": "private" if private else "public", "archived": archived}
    if tag:
        params["tag"] = tag
    if query:
        params["q"] = query
    headers = {PIN_HEADER: pin} if pin else {}
    resp = _request("GET", "/links", host=host, params=params, headers=headers)
    for link in resp.json():
        typer.echo(f"{link['category']}\t{link['title']}\t{link['url']}")


@app.command()
def export(
    output: Path = typer.Argument(..., help="Destination JSON file"),
    private: bool = typer.Option(False, "--private", help="Export the private area"),
    pin: Optional[str] = typer.Option(None, "--pin", help="Private PIN"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Write an export document to OUTPUT."""
    body = {"scope": "private" if private else "public", "pin": pin}
    resp = _request("POST", "/links/export", host=host, json=body)
    payload = resp.json()
    output.expanduser().write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    typer.echo(f"Exported {len(payload['links'])} links to {output}")


@app.command("import")
def import_links(
    source: Path = typer.Argument(..., exists=True, readable=True, help="Export file to import"),
    private: bool = typer.Option(False, "--private", help="Import into the private area"),
    pin: Optional[str] = typer.Option(None, "--pin", help="Private PIN"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Merge an export file into the collection."""
    try:
        document = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"Not a JSON file: {exc}", err=True)
        raise typer.Exit(code=1)
    body = {"document": document, "targetPrivate": private, "pin": pin}
    resp = _request("POST", "/links/import", host=host, json=body)
    _echo(resp.json())


@rules_app.command("list")
def list_rules(host: Optional[str] = typer.Option(None, "--host", help="Override backend host")) -> None:
    """List custom rules."""
    resp = _request("GET", "/rules", host=host)
    _echo(resp.json()["custom"])


@rules_app.command("add")
def add_rule(
    category: str = typer.Argument(..., help="Target category"),
    label: Optional[str] = typer.Option(None, "--label", help="Friendly label"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma separated tags"),
    hosts: Optional[str] = typer.Option(None, "--hosts", help="Comma separated host fragments"),
    paths: Optional[str] = typer.Option(None, "--paths", help="Comma separated path fragments"),
    keywords: Optional[str] = typer.Option(None, "--keywords", help="Comma separated keywords"),
    regex: Optional[str] = typer.Option(None, "--regex", help="Pattern tested against the full URL"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Create a custom rule."""
    payload = {
        "category": category,
        "label": label,
        "tags": tags or [],
        "hostIncludes": hosts or [],
        "pathIncludes": paths or [],
        "keywords": keywords or [],
        "regex": regex,
    }
    resp = _request("POST", "/rules", host=host, json=payload)
    _echo(resp.json()["custom"])


@rules_app.command("remove")
def remove_rule(
    rule_id: str = typer.Argument(..., help="Rule identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Delete a custom rule."""
    _request("DELETE", f"/rules/{rule_id}", host=host)
    typer.echo(json.dumps({"status": "ok"}))


if __name__ == "__main__":
    app()
