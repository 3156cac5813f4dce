#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for SeedWeaver.

This module provides the main CLI entry point and all subcommands for
organelle seed expansion and bubble collapsing.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .assembly_core.dfs_seed_module import DFSSeedEngine
from .config.schema import (
    ConfigValidationError,
    SeedGraphConfig,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)
from .errors import SeedWeaverError
from .io_utils.assembly_export import export_results
from .io_utils.user_input import load_assembly_graph, load_seed_file, parse_seed_ids


def _setup_logging(level: str, log_path: Path = None, verbose: bool = False, quiet: bool = False):
    """Configure root logging for a CLI run."""
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'ERROR'

    handlers = [logging.StreamHandler()]
    if log_path is not None:
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def _hash_progress(scanned: int, total: int):
    """Print one '#' per progress tick, ending the line after the scan."""
    click.echo('#', nl=False, err=True)
    if scanned == total:
        click.echo('', err=True)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    SeedWeaver: organelle seed expansion and graph simplification

    Grows a set of marker-gene seed contigs along high-confidence overlap
    links and collapses short bubble contigs in the resulting subgraph.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='seedweaver_config.yaml',
              help='Output configuration file path')
def config_init(output):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating configuration template: {output}")

    try:
        save_config_template(Path(output))
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")
    click.echo("\nEdit the seed_graph section to tune expansion and bubble thresholds.")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    seed_graph = config['seed_graph']
    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nSeed expansion:")
    click.echo(f"  Filter depth: {seed_graph['filter_depth']}")
    click.echo(f"  Growth link ratio: {seed_graph['growth_link_ratio']}")
    click.echo(f"  Max rounds: {seed_graph['max_expansion_rounds']}")
    if seed_graph.get('deadline_seconds'):
        click.echo(f"  Deadline: {seed_graph['deadline_seconds']}s")

    click.echo("\nSubgraph:")
    click.echo(f"  Retention link ratio: {seed_graph['retention_link_ratio']}")
    click.echo(f"  Bubble max length: {seed_graph['bubble_max_length']} bp")
    click.echo(f"  Invalid end tags: {seed_graph['invalid_orientation']}")

    click.echo("\nOutput:")
    click.echo(f"  GFA: {config['output']['write_gfa']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


# ============================================================================
# Seed Expansion Command
# ============================================================================

@main.command()
@click.option('--graph', '-g', 'graph_file', required=True, type=click.Path(exists=True),
              help='Contig graph table (contig lines followed by C link lines)')
@click.option('--seeds', '-s', 'seed_ids', type=str, default=None,
              help='Comma-separated initial seed contig ids')
@click.option('--seeds-file', type=click.Path(exists=True), default=None,
              help='File of initial seeds, one contig id or name per line')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output directory')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--filter-depth', type=float, default=None,
              help='Minimum contig depth for expansion (default 2)')
@click.option('--nucl-depth', type=float, default=None,
              help='Nucleotide depth (accepted for compatibility, not used)')
@click.option('--max-rounds', type=int, default=None,
              help='Expansion round cap (default 100)')
@click.option('--no-gfa', is_flag=True,
              help='Skip writing the seed subgraph as GFA')
@click.pass_context
def expand(ctx, graph_file, seed_ids, seeds_file, output, config_file,
           filter_depth, nucl_depth, max_rounds, no_gfa):
    """Expand seeds over the contig graph and collapse bubble contigs."""
    if not seed_ids and not seeds_file:
        raise click.UsageError("Provide initial seeds with --seeds or --seeds-file")

    output_dir = Path(output)
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        config = load_config(Path(config_file) if config_file else None)
        config = apply_overrides(config, {
            'seed_graph.filter_depth': filter_depth,
            'seed_graph.nucl_depth': nucl_depth,
            'seed_graph.max_expansion_rounds': max_rounds,
            'output.write_gfa': False if no_gfa else None,
        })
        errors = validate_config(config)
        if errors:
            raise ConfigValidationError("; ".join(errors))
        seed_config = SeedGraphConfig.from_dict(config['seed_graph'])
    except ConfigValidationError as e:
        click.echo(f"✗ Invalid configuration: {e}", err=True)
        sys.exit(1)

    logging_config = config['output']['logging']
    log_file = logging_config.get('log_file')
    _setup_logging(
        logging_config['level'],
        log_path=output_dir / log_file if log_file else None,
        verbose=ctx.obj['VERBOSE'],
        quiet=ctx.obj['QUIET']
    )

    try:
        graph = load_assembly_graph(graph_file)
        initial_seeds = parse_seed_ids(seed_ids) if seed_ids else []
        if seeds_file:
            initial_seeds.extend(load_seed_file(seeds_file, graph.contigs))

        progress = _hash_progress if ctx.obj['VERBOSE'] else None
        engine = DFSSeedEngine(seed_config, progress=progress)
        result = engine.run(graph, initial_seeds)
        result.raise_for_status()

        outputs = export_results(
            graph, result.seeds, result.links, result.stats, output_dir,
            write_gfa=config['output']['write_gfa']
        )
    except SeedWeaverError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    if not ctx.obj['QUIET']:
        click.echo(f"✓ {result.stats['final_seeds']} seeds, {result.stats['final_links']} links "
                   f"({result.stats['bubbles_removed']} bubbles removed)")
        for kind, path in outputs.items():
            click.echo(f"  {kind}: {path}")


if __name__ == '__main__':
    main()
