"""
Copyright BOOSTRY Co., Ltd.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.

You may obtain a copy of the License at
http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing,
software distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.

See the License for the specific language governing permissions and
limitations under the License.

SPDX-License-Identifier: Apache-2.0
"""

import logging
import sys
from typing import Annotated

import click
import httpx
import typer
from rich import print
from rich.console import Console
from rich.table import Table

from app.model.db import ReviewStatus
from app.model.schema import ReviewDecisionRequest, ReviewTarget

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


app = typer.Typer(pretty_exceptions_show_locals=False)

TargetArgument = Annotated[
    str,
    typer.Argument(
        click_type=click.Choice([t.value for t in ReviewTarget], case_sensitive=False)
    ),
]
AuthTokenArgument = Annotated[str, typer.Argument(..., envvar="AUTH_TOKEN")]
ApiUrlArgument = Annotated[str, typer.Argument(..., envvar="API_URL")]


@app.command(name="list")
def list_review_items(
    target: TargetArgument,
    status: Annotated[
        str,
        typer.Argument(
            click_type=click.Choice(
                [s.value for s in ReviewStatus], case_sensitive=False
            )
        ),
    ] = ReviewStatus.PENDING.value,
    auth_token: AuthTokenArgument = None,
    api_url: ApiUrlArgument = "http://localhost:5000",
):
    resp = httpx.get(
        url=f"{api_url}/admin/{target.lower()}",
        params={"status": status.lower()},
        headers=__auth_header(auth_token),
    )

    if resp.status_code != 200:
        typer.echo(typer.style("Failed to get review items", fg="red"), err=True)
        print(resp.json())
        sys.exit(1)

    console = Console()

    item_table = Table(title=f"{target} ({status})")
    item_table.add_column("ID")
    item_table.add_column("Requester")
    item_table.add_column("Amount")
    item_table.add_column("Status")
    item_table.add_column("Note")
    item_table.add_column("Created")

    for item in resp.json()["items"]:
        item_table.add_row(
            item["id"],
            item["requester_id"] or "",
            str(item["amount"]) if item["amount"] is not None else "",
            item["status"],
            item["admin_note"] or "",
            item["created"],
        )

    console.print(item_table)


@app.command(name="approve")
def approve(
    target: TargetArgument,
    item_id: str,
    note: Annotated[str, typer.Option(help="Note from administrator")] = None,
    auth_token: AuthTokenArgument = None,
    api_url: ApiUrlArgument = "http://localhost:5000",
):
    __decide(target, item_id, "approve", note, auth_token, api_url)


@app.command(name="reject")
def reject(
    target: TargetArgument,
    item_id: str,
    note: Annotated[str, typer.Option(help="Note from administrator")] = None,
    auth_token: AuthTokenArgument = None,
    api_url: ApiUrlArgument = "http://localhost:5000",
):
    __decide(target, item_id, "reject", note, auth_token, api_url)


def __decide(
    target: str,
    item_id: str,
    decision: str,
    note: str | None,
    auth_token: str | None,
    api_url: str,
):
    resp = httpx.post(
        url=f"{api_url}/admin/{target.lower()}/{item_id}/{decision}",
        json=ReviewDecisionRequest(admin_note=note).model_dump(),
        headers=__auth_header(auth_token),
    )

    if resp.status_code != 200:
        typer.echo(typer.style(f"Failed to {decision} the request", fg="red"), err=True)
        print(resp.json())
        sys.exit(1)

    typer.echo(typer.style(f"{item_id}: {resp.json()['status']}", fg="green"))


def __auth_header(auth_token: str | None) -> dict:
    if auth_token is None:
        typer.echo(typer.style("AUTH_TOKEN is not set", fg="red"), err=True)
        sys.exit(1)
    return {"Authorization": f"Bearer {auth_token}"}


if __name__ == "__main__":
    app()
