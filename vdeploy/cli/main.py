"""Main CLI entrypoint for vdeploy."""

import json
import logging
import sys
from typing import Any, Dict, Optional

import click

from ..analyzer import analyze_project
from ..config import DeployConfig
from ..errors import VdeployError
from ..events import read_events, run_exists
from ..orchestrator import deploy, prepare


@click.group()
@click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx, output_json, verbose):
    """vdeploy - Deploy a source tree to Vercel."""
    ctx.ensure_object(dict)
    ctx.obj['json'] = output_json
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def _json_output(data: Dict[str, Any]) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=None))


def _human_output(message: str) -> None:
    """Output human-readable message."""
    if not click.get_current_context().obj.get('json', False):
        click.echo(message)


def _fail(ctx, message: str, code: int = 1) -> None:
    if ctx.obj.get('json'):
        _json_output({'error': message})
    else:
        click.echo(f"❌ {message}", err=True)
    sys.exit(code)


def _load_config(ctx, **overrides) -> Optional[DeployConfig]:
    try:
        return DeployConfig.from_env().with_overrides(**overrides)
    except VdeployError as e:
        _fail(ctx, f"Invalid configuration: {e}")


@main.command('deploy')
@click.argument('path', type=click.Path(exists=True, file_okay=False))
@click.option('--token', help='Vercel token (defaults to $VERCEL_TOKEN)')
@click.option('--project-id', help='Vercel project id (defaults to $VERCEL_PROJECT_ID)')
@click.option('--timeout', type=float, help='Seconds to wait for the Vercel CLI')
@click.pass_context
def deploy_cmd(ctx, path, token, project_id, timeout):
    """Deploy the project at PATH."""
    config = _load_config(ctx, token=token, project_id=project_id, timeout_s=timeout)
    try:
        result = deploy(path, config)
    except (VdeployError, OSError) as e:
        _fail(ctx, f"Deployment failed: {e}")

    if ctx.obj.get('json'):
        _json_output(result.to_dict())
    else:
        _human_output(f"🚀 Deployed {result.project_type.value} project")
        _human_output(f"Run: {result.run_id}")
        _human_output(f"🌐 {result.url}")


@main.command()
@click.argument('path', type=click.Path(exists=True, file_okay=False))
@click.pass_context
def detect(ctx, path):
    """Show how the project at PATH would be classified."""
    try:
        report = analyze_project(path)
    except VdeployError as e:
        _fail(ctx, f"Detection failed: {e}")

    if ctx.obj.get('json'):
        _json_output({
            'project_type': report.project_type.value,
            'markers': report.markers,
            'rationale': report.rationale,
        })
        return

    _human_output(f"Project type: {report.project_type.value}")
    for line in report.rationale:
        _human_output(f"  - {line}")


@main.command('prepare')
@click.argument('path', type=click.Path(exists=True, file_okay=False))
@click.option('--out', 'out_dir', required=True, type=click.Path(file_okay=False), help='Directory to write the prepared tree into')
@click.pass_context
def prepare_cmd(ctx, path, out_dir):
    """Build the deployable tree for PATH without deploying it."""
    config = _load_config(ctx)
    try:
        report, descriptor = prepare(path, out_dir, config)
    except VdeployError as e:
        _fail(ctx, f"Prepare failed: {e}")

    if ctx.obj.get('json'):
        _json_output({'project_type': report.project_type.value, 'out': out_dir, 'descriptor': descriptor})
        return

    _human_output(f"📦 Prepared {report.project_type.value} project in {out_dir}")
    _human_output(json.dumps(descriptor, indent=2))


@main.command()
@click.argument('run_id')
@click.pass_context
def logs(ctx, run_id):
    """Show the stored events of a run."""
    config = _load_config(ctx)
    if config.home is None or not run_exists(config.home, run_id):
        _fail(ctx, f"Run {run_id} not found", code=2)

    events = read_events(config.home, run_id)
    if ctx.obj.get('json'):
        _json_output({'run_id': run_id, 'events': events})
        return

    for event in events:
        _human_output(f"{event.get('ts', '')} {event.get('type', '')} {json.dumps(event.get('data', {}))}")


if __name__ == '__main__':
    main()
