# src/kubegetinfo/cli/formatter.py
import io
import json
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.measure import Measurement
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from ruamel.yaml import YAML

from kubegetinfo.core.models import Output, OutputItem
from kubegetinfo.extraction.extractor import SchedulingField

OUTPUT_FORMATS = ("json", "yaml", "table")
NONE = "<none>"
# Upper bound used when measuring a table at its natural width
MEASURE_WIDTH = 1 << 20

FIELD_HEADERS = {
    SchedulingField.TOLERATIONS: "TOLERATIONS",
    SchedulingField.AFFINITY: "AFFINITY",
    SchedulingField.NODESELECTOR: "NODESELECTOR",
    SchedulingField.RESOURCES: "RESOURCES",
    SchedulingField.TOPOLOGY: "TOPOLOGY SPREAD CONSTRAINTS",
    SchedulingField.PRIORITY: "PRIORITY",
    SchedulingField.RUNTIME: "RUNTIME",
}


def _pairs(mapping: Optional[Dict[str, str]]) -> str:
    """Sorted k=v pairs joined by ',' (or <none>)."""
    if not mapping:
        return NONE
    return ",".join(sorted(f"{k}={v}" for k, v in mapping.items()))


def _count(values: Optional[List[Any]], noun: str) -> str:
    return f"{len(values)} {noun}(s)" if values else NONE


def _present(value: Any) -> str:
    return "present" if value else NONE


class OutputFormatter:
    """
    OutputFormatter: renders query results as JSON, YAML or a
    kubectl-style table. JSON and YAML go out verbatim; only the table
    and the colourised JSON pass through rich.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.yaml = YAML()
        self.yaml.default_flow_style = False
        # Same layout kubectl uses: 2-space maps, sequences offset under their key
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def to_json(self, output: Output) -> str:
        return json.dumps(output.to_dict(), indent=2, ensure_ascii=False)

    def to_yaml(self, output: Output) -> str:
        stream = io.StringIO()
        self.yaml.dump(output.to_dict(), stream)
        return stream.getvalue()

    def render(self, output: Output, fmt: str, command: str,
               field: Optional[SchedulingField] = None,
               namespaced: bool = False, color: bool = False):
        fmt = fmt.lower()
        if fmt == "json":
            text = self.to_json(output)
            if color:
                # soft_wrap keeps long string values on one uncropped line
                self.console.print(Syntax(text, "json", theme="monokai", background_color="default"),
                                   soft_wrap=True)
            else:
                self.console.file.write(text + "\n")
        elif fmt == "yaml":
            self.console.file.write(self.to_yaml(output))
        elif fmt == "table":
            self.print_table(output, command, field, namespaced)
        else:
            raise ValueError(
                f"unsupported output format '{fmt}'. Supported formats: {', '.join(OUTPUT_FORMATS)}"
            )

    # --- TABLE RENDERING ---

    def _headers(self, command: str, field: Optional[SchedulingField], namespaced: bool) -> List[str]:
        headers = ["NAME", "NAMESPACE"] if namespaced else ["NAME"]
        if command == "labels":
            headers.append("LABELS")
        elif command == "annotations":
            headers.append("ANNOTATIONS")
        elif command == "owner":
            headers += (["OWNER NAMESPACE"] if namespaced else []) + ["OWNER KIND", "OWNER NAME"]
        elif field is None:
            headers += ["NODESELECTOR", "AFFINITY", "TOLERATIONS", "RESOURCES"]
        else:
            headers.append(FIELD_HEADERS[field])
        return headers

    def _rows(self, item: OutputItem, command: str, field: Optional[SchedulingField],
              namespaced: bool) -> List[List[str]]:
        lead = [item.name, item.namespace or ""] if namespaced else [item.name]

        if command == "labels":
            return [lead + [_pairs(item.labels)]]
        if command == "annotations":
            return [lead + [_pairs(item.annotations)]]

        if command == "owner":
            if not item.owner_references:
                return [lead + [NONE] * (3 if namespaced else 2)]
            rows = []
            for i, ref in enumerate(item.owner_references):
                # Only the first owner row repeats the object's identity
                prefix = lead if i == 0 else [""] * len(lead)
                owner_ns = [ref.namespace or NONE] if namespaced else []
                rows.append(prefix + owner_ns + [ref.kind, ref.name])
            return rows

        if field is None:
            snap = item.scheduling
            if snap is None:
                return [lead + [NONE] * 4]
            has_resources = snap.resource_requests is not None or snap.resource_limits is not None
            return [lead + [
                _pairs(snap.node_selector),
                _present(snap.affinity),
                _count(snap.tolerations, "item"),
                _present(has_resources),
            ]]

        cell = {
            SchedulingField.TOLERATIONS: lambda: _count(item.tolerations, "toleration"),
            SchedulingField.AFFINITY: lambda: _present(item.affinity),
            SchedulingField.NODESELECTOR: lambda: _pairs(item.node_selector),
            SchedulingField.RESOURCES: lambda: _count(item.resources, "container"),
            SchedulingField.TOPOLOGY: lambda: _count(item.topology_spread_constraints, "constraint"),
            SchedulingField.PRIORITY: lambda: _present(item.priority),
            SchedulingField.RUNTIME: lambda: _present(item.runtime),
        }[field]()
        return [lead + [cell]]

    def build_table(self, output: Output, command: str,
                    field: Optional[SchedulingField] = None, namespaced: bool = False) -> Table:
        """
        Builds the table at its natural width. Cells never wrap or truncate:
        a row wider than the terminal runs past it, like kubectl's own output.
        """
        table = Table(box=None, show_header=True, header_style="bold", pad_edge=False, padding=(0, 2, 0, 0))
        for header in self._headers(command, field, namespaced):
            table.add_column(header, no_wrap=True, overflow="ignore")
        for item in output.items:
            for row in self._rows(item, command, field, namespaced):
                table.add_row(*(Text(cell) for cell in row))
        # A fixed width stops rich from shrinking columns to the console width
        table.width = Measurement.get(
            self.console, self.console.options.update_width(MEASURE_WIDTH), table
        ).maximum
        return table

    def print_table(self, output: Output, command: str,
                    field: Optional[SchedulingField] = None, namespaced: bool = False):
        """Nothing is printed for an empty result, not even the header."""
        if not output.items:
            return
        self.console.print(self.build_table(output, command, field, namespaced), crop=False)
