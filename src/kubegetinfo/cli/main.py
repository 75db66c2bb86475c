#!/usr/bin/env python3
"""
KUBEGETINFO CLI - kubectl plugin front end
------------------------------------------
Translates `kubectl getinfo <command> ...` into an engine query and renders
the result as JSON, YAML or a table.

    kubectl getinfo labels pods -n kube-system
    kubectl getinfo scheduling tolerations deploy web api -o yaml
    kubectl getinfo owner rs -A -o table

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import sys
import argparse
import logging
from typing import List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from kubegetinfo.cli.completion import SHELLS, generate_completion
from kubegetinfo.cli.formatter import OUTPUT_FORMATS, OutputFormatter
from kubegetinfo.cli.usage import command_help
from kubegetinfo.core.config import CatalogOrder, GetInfoConfig, MergePolicy
from kubegetinfo.core.engine import GetInfoEngine, QueryRequest
from kubegetinfo.core.errors import GetInfoError
from kubegetinfo.discovery.catalog import KubeDiscovery
from kubegetinfo.discovery.kubeconfig import current_namespace, load_api_client
from kubegetinfo.discovery.store import KubeObjectStore
from kubegetinfo.extraction.extractor import SchedulingField

__version__ = "0.1.0"

# Output goes to stdout; errors and the banner go to stderr
console = Console()
err_console = Console(stderr=True)

COMMAND_CHOICES = ("labels", "annotations", "owner", "scheduling", "completion")

EPILOG = """examples:
  kubectl getinfo labels pods
  kubectl getinfo annotations deploy web -n prod
  kubectl getinfo owner pods -A -o table
  kubectl getinfo scheduling deployments -l app=web
  kubectl getinfo scheduling tolerations pods -oyaml
  kubectl getinfo completion bash

scheduling fields: """ + ", ".join(SchedulingField.names()) + """

Use "kubectl getinfo <command> --help" for more information about a command."""


class KubeGetInfoCLI:
    """
    CLI wrapper that turns parsed arguments into a QueryRequest, runs it
    through the GetInfoEngine and hands the result to the OutputFormatter.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="kubectl-getinfo",
            description="kubectl getinfo - labels, annotations, owners and scheduling info for any resource",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=EPILOG,
            add_help=False,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the positional command/targets and the kubectl-style flags."""
        p = self.parser
        # Handled in run(): after a command, -h prints that command's own page
        p.add_argument("-h", "--help", action="store_true", help="Show help (per command when one is given)")
        p.add_argument("--version", action="version", version=f"kubectl-getinfo v{__version__}")
        p.add_argument("command", nargs="?", choices=COMMAND_CHOICES, metavar="command",
                       help="one of: " + ", ".join(COMMAND_CHOICES))
        p.add_argument("targets", nargs="*", metavar="args",
                       help="[field] <resource-type> [name ...]  (or the shell for 'completion')")

        p.add_argument("-n", "--namespace", help="Namespace to query (default: current context namespace)")
        p.add_argument("-A", "--all-namespaces", action="store_true", help="Query across all namespaces")
        p.add_argument("-l", "--selector", help="Label selector, e.g. app=web,tier!=cache")
        p.add_argument("-o", "--output", default="json", type=str.lower, choices=OUTPUT_FORMATS,
                       help="Output format (default: json)")
        p.add_argument("-c", "--color", action="store_true", help="Colorize JSON output")

        p.add_argument("--kubeconfig", help="Path to the kubeconfig file")
        p.add_argument("--context", help="Kubeconfig context to use")
        p.add_argument("--resource-merge", choices=[m.value for m in MergePolicy],
                       help="How scheduling snapshots merge a resource key set by several containers")
        p.add_argument("--catalog-order", choices=[o.value for o in CatalogOrder],
                       help="Catalog ordering used when a type name is ambiguous")
        p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    def print_header(self, subtitle: str):
        err_console.print(Panel.fit(
            f"[bold cyan]kubectl-getinfo v{__version__}[/bold cyan]\n"
            "══════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan",
        ))

    def parse(self, argv: List[str]) -> argparse.Namespace:
        # Flags may be interleaved with positionals, as with kubectl
        return self.parser.parse_intermixed_args(argv)

    @staticmethod
    def split_targets(command: str, targets: List[str]) -> Tuple[Optional[SchedulingField], str, List[str]]:
        """
        Splits positionals into (scheduling field, resource type, names).
        For 'scheduling', a leading field name is only taken as the field
        when a resource type follows it.
        """
        field = None
        if command == "scheduling" and len(targets) >= 2 and targets[0].lower() in SchedulingField.names():
            field = SchedulingField.parse(targets[0].lower())
            targets = targets[1:]
        if not targets:
            raise ValueError(f"'{command}' requires a resource type")
        return field, targets[0], list(targets[1:])

    def _run_completion(self, args: argparse.Namespace):
        if len(args.targets) != 1:
            raise ValueError(f"'completion' requires exactly one shell: {', '.join(SHELLS)}")
        console.file.write(generate_completion(args.targets[0]))

    def _run_query(self, args: argparse.Namespace):
        cfg = GetInfoConfig.from_env().with_overrides(
            kubeconfig=args.kubeconfig,
            context=args.context,
            catalog_order=args.catalog_order,
            resource_merge=args.resource_merge,
            verbose=args.verbose,
        )
        logging.basicConfig(
            level=getattr(logging, cfg.log_level, logging.WARNING),
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

        field, resource_type, names = self.split_targets(args.command, args.targets)

        api_client = load_api_client(cfg)
        engine = GetInfoEngine(
            discovery=KubeDiscovery(api_client, cfg.request_timeout),
            store=KubeObjectStore(api_client, cfg.request_timeout),
            config=cfg,
            current_namespace=lambda: current_namespace(cfg),
        )
        result = engine.run(QueryRequest(
            command=args.command,
            resource_type=resource_type,
            names=names,
            scheduling_field=field,
            namespace=args.namespace,
            all_namespaces=args.all_namespaces,
            selector=args.selector,
        ))

        OutputFormatter(console).render(
            result.output, args.output, args.command,
            field=field, namespaced=result.namespaced, color=args.color,
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point; returns the process exit code."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("Resource Info for kubectl")
            self.parser.print_help()
            return 0

        args = self.parse(argv)
        if args.help:
            if args.command is None:
                self.parser.print_help()
            else:
                console.file.write(command_help(args.command, args.targets))
            return 0
        if args.command is None:
            self.parser.error("a command is required")

        try:
            if args.command == "completion":
                self._run_completion(args)
            else:
                self._run_query(args)
        except (GetInfoError, ValueError) as e:
            err_console.print(Text.assemble(("Error:", "bold red"), f" {e}"))
            return 1
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeGetInfoCLI().run())
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
