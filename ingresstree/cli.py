"""Command-line interface for ingresstree."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def read_command(args: argparse.Namespace) -> None:
    """Read one ingress and print its configuration tree."""
    import yaml
    from .client import IngressClient
    from .config import resolve_config
    from .exceptions import IngressTreeError
    from .reader import IngressReader

    setup_logging(args.verbose, args.log_format)

    try:
        reader_config = resolve_config(args.config)
        cluster_config = reader_config.get_cluster(args.cluster)
    except IngressTreeError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    async def run_read():
        client = IngressClient(cluster_config)
        try:
            return await IngressReader(client).read({"namespace": args.namespace, "name": args.name})
        finally:
            client.disconnect()

    try:
        tree = asyncio.run(run_read())
    except IngressTreeError as e:
        logger.error("Read failed", namespace=args.namespace, name=args.name, error=str(e))
        print(f"Error reading ingress: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output == "json":
        print(json.dumps(tree.to_tree(), indent=2))
    elif args.output == "yaml":
        print(yaml.dump(tree.to_tree(), default_flow_style=False, sort_keys=False))
    else:
        _print_table(tree)


def _print_table(tree) -> None:
    if not tree.found:
        print(f"Ingress {tree.id} not found.")
        return

    spec = tree.spec
    print(f"\nIngress {tree.id} (class: {spec.ingress_class_name or '-'})\n")
    print(f"{'Host':<40} {'Path':<30} {'Type':<24} {'Backend':<30}")
    print("-" * 124)

    for rule in spec.rule:
        paths = rule.http.path if rule.http else []
        if not paths:
            print(f"{rule.host or '*':<40} {'-':<30} {'-':<24} {'-':<30}")
        for path in paths:
            print(f"{rule.host or '*':<40} {path.path or '-':<30} {path.path_type.value:<24} {_backend_label(path.backend):<30}")

    if spec.default_backend:
        print(f"\nDefault backend: {_backend_label(spec.default_backend)}")
    for tls in spec.tls:
        print(f"TLS: {', '.join(tls.hosts) or '*'} -> {tls.secret_name or '-'}")
    for endpoint in tree.status.load_balancer if tree.status else []:
        print(f"Load balancer: {endpoint.ip or endpoint.hostname}")


def _backend_label(backend) -> str:
    if backend is None:
        return "-"
    if backend.service:
        port = backend.service.port
        port_label = ""
        if port is not None:
            port_label = f":{port.name if port.name else port.number}"
        return f"{backend.service.name}{port_label}"
    if backend.resource:
        return f"{backend.resource.kind}/{backend.resource.name}"
    return "-"


def schema_command(args: argparse.Namespace) -> None:
    """Print the JSON schema of the configuration tree."""
    from .schema import get_tree_schema
    print(json.dumps(get_tree_schema(), indent=2))


def serve_command(args: argparse.Namespace) -> None:
    """Start the ingresstree API server."""
    import uvicorn
    from .api import app, initialize_reader
    from .config import resolve_config
    from .exceptions import ConfigError

    setup_logging(args.verbose, args.log_format)

    try:
        reader_config = resolve_config(args.config)
    except ConfigError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    initialize_reader(reader_config)

    logger.info("Starting ingresstree server", host=args.host, port=args.port)
    print(f"Starting ingresstree server on {args.host}:{args.port}")
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info" if not args.verbose else "debug"
    )


def init_config_command(args: argparse.Namespace) -> None:
    """Generate a sample configuration file."""
    import yaml

    sample_config = {
        "clusters": [
            {
                "name": "prod-us-west-1",
                "kubeconfig_path": "~/.kube/config",
                "context": "prod-us-west-1",
                "environment": "prod",
                "region": "us-west-1",
                "enabled": True,
                "request_timeout": 10,
            },
            {
                "name": "staging-us-west-1",
                "kubeconfig_path": "~/.kube/config",
                "context": "staging-us-west-1",
                "environment": "staging",
                "region": "us-west-1",
                "enabled": True,
            }
        ],
        "default_cluster": "staging-us-west-1",
    }

    config_yaml = yaml.dump(sample_config, default_flow_style=False, sort_keys=False)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(config_yaml)
        print(f"Sample configuration written to {output_path}")
    else:
        print("Sample configuration:\n")
        print(config_yaml)


def validate_config_command(args: argparse.Namespace) -> None:
    """Validate a configuration file."""
    from .config import load_config
    from .exceptions import ConfigError

    try:
        reader_config = load_config(args.config)
    except ConfigError as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    print(f"✓ Configuration file {args.config} is valid")
    print(f"\nConfiguration summary:")
    print(f"  Clusters: {len(reader_config.clusters)}")
    print(f"  Default cluster: {reader_config.default_cluster or 'None'}")

    if reader_config.clusters:
        print(f"\nConfigured clusters:")
        for cluster in reader_config.clusters:
            status = "enabled" if cluster.enabled else "disabled"
            print(f"  - {cluster.name} ({cluster.environment}) - {status}")


def version_command(args: argparse.Namespace) -> None:
    """Show version information."""
    from . import __version__
    print(f"ingresstree {__version__}")


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ingresstree: read Kubernetes ingresses as configuration trees",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        help="Log format (default: LOG_FORMAT or console)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    read_parser = subparsers.add_parser("read", help="Read an ingress and print its tree")
    read_parser.add_argument("name", help="Ingress name")
    read_parser.add_argument(
        "--namespace", "-n",
        required=True,
        help="Ingress namespace"
    )
    read_parser.add_argument("--config", "-c", help="Configuration file path")
    read_parser.add_argument("--cluster", help="Cluster name from the configuration")
    read_parser.add_argument(
        "--output", "-o",
        choices=["json", "yaml", "table"],
        default="json",
        help="Output format (default: json)"
    )
    read_parser.set_defaults(func=read_command)

    schema_parser = subparsers.add_parser("schema", help="Print the JSON schema of the tree")
    schema_parser.set_defaults(func=schema_command)

    serve_parser = subparsers.add_parser("serve", help="Start the ingresstree API server")
    serve_parser.add_argument("--config", "-c", help="Configuration file path")
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    serve_parser.set_defaults(func=serve_command)

    init_parser = subparsers.add_parser("init-config", help="Generate a sample configuration file")
    init_parser.add_argument(
        "--output", "-o",
        help="Output file path (default: stdout)"
    )
    init_parser.set_defaults(func=init_config_command)

    validate_parser = subparsers.add_parser("validate-config", help="Validate a configuration file")
    validate_parser.add_argument(
        "--config", "-c",
        required=True,
        help="Configuration file path"
    )
    validate_parser.set_defaults(func=validate_config_command)

    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=version_command)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
