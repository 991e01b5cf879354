import asyncio
import logging

import typer
from dotenv import load_dotenv

from swebridge import (
    AgentJobClient,
    BridgeError,
    ChatCompletionClient,
    agent_config_from_env,
    azure_chat_config_from_env,
)

cli = typer.Typer(add_completion=False)


@cli.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log outbound requests")):
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
def complete(
    user_prompt: str = typer.Argument(..., help="User message"),
    system: str = typer.Option("You are a helpful assistant.", "--system", help="System prompt"),
):
    """Run a single chat completion against the Azure OpenAI deployment."""
    try:
        cfg = azure_chat_config_from_env()
        content = asyncio.run(ChatCompletionClient().complete(cfg, system, user_prompt))
    except BridgeError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.secho(content, fg=typer.colors.GREEN)


@cli.command()
def submit(
    issue_number: int = typer.Argument(..., help="GitHub issue number"),
    repo: str = typer.Option(..., help="owner/repo"),
):
    """Hand a GitHub issue to the SWE Agent and print the job handle."""
    if "/" not in repo:
        typer.secho("Error: repo must be in 'owner/repo' format", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)
    owner, name = repo.split("/", 1)
    try:
        cfg = agent_config_from_env()
        result = asyncio.run(AgentJobClient().submit(cfg, owner, name, issue_number))
    except BridgeError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(f"job_id:  {result.job_id}")
    typer.echo(f"status:  {result.status}")
    if result.message:
        typer.echo(f"message: {result.message}")


if __name__ == "__main__":
    cli()
