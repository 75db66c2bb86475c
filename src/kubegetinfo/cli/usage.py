#!/usr/bin/env python3
"""
KUBEGETINFO USAGE - per-command help pages
------------------------------------------
`kubectl getinfo <command> --help` and
`kubectl getinfo scheduling <field> --help` print one of these pages
instead of the general argparse help.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

from typing import List, Optional

from kubegetinfo.extraction.extractor import SchedulingField

QUERY_FLAGS = """Flags:
  -n, --namespace <namespace>      Specify namespace
  -A, --all-namespaces             All namespaces
  -l, --selector <selector>        Label selector (e.g., -l app=nginx)
  -o, --output <format>            Output format (json, yaml, table). Default: json
  -c, --color                      Colorize JSON output
      --kubeconfig <path>          Path to the kubeconfig file
      --context <name>             Kubeconfig context to use
      --resource-merge <policy>    Resource merge policy (concat, sum)
      --catalog-order <order>      Catalog order (group, discovery)
  -v, --verbose                    Debug logging to stderr
  -h, --help                       Show help
"""

COMMAND_HELP = {
    "labels": """Usage: kubectl getinfo labels <resource-type> [resource-name...] [flags]

List labels of Kubernetes resources.

Examples:
  kubectl getinfo labels pods                      # all pods in the current namespace
  kubectl getinfo labels pods pod1 pod2            # specific pods
  kubectl getinfo labels pods -A                   # pods in all namespaces
  kubectl getinfo labels pods -n kube-system       # pods in kube-system
  kubectl getinfo labels deployments -l app=nginx  # deployments matching app=nginx
  kubectl getinfo labels pods -o table             # table output
""",
    "annotations": """Usage: kubectl getinfo annotations <resource-type> [resource-name...] [flags]

List annotations of Kubernetes resources.

Examples:
  kubectl getinfo annotations pods                 # all pods in the current namespace
  kubectl getinfo annotations pods pod1 pod2       # specific pods
  kubectl getinfo annotations services -n default  # services in default
  kubectl getinfo annotations deployments -o yaml  # YAML output
""",
    "owner": """Usage: kubectl getinfo owner <resource-type> [resource-name...] [flags]

List ownerReferences of Kubernetes resources: the parent objects that own
or control the queried ones.

Examples:
  kubectl getinfo owner pods                       # owners of all pods
  kubectl getinfo owner pods pod1                  # owners of one pod
  kubectl getinfo owner replicasets -n kube-system # owners of replicasets
  kubectl getinfo owner pods -A -o table           # table across all namespaces
""",
    "scheduling": """Usage: kubectl getinfo scheduling [field] <resource-type> [resource-name...] [flags]

List scheduling-related fields of pods and workloads that carry a pod
template (deployments, statefulsets, daemonsets, jobs, cronjobs...).

Without a field, a summary of everything is shown:
  - nodeSelector and nodeName
  - affinity (nodeAffinity, podAffinity, podAntiAffinity)
  - tolerations and topologySpreadConstraints
  - resource requests and limits, merged across containers
  - schedulerName, priorityClassName, priority
  - runtimeClassName, hostNetwork, hostPID, hostIPC

Fields:
  tolerations       Only tolerations
  affinity          Only affinity rules
  nodeselector      Only nodeSelector
  resources         Only per-container resource requests/limits
  topology          Only topologySpreadConstraints
  priority          Only priorityClassName, priority and preemptionPolicy
  runtime           Only runtimeClassName, hostNetwork, hostPID and hostIPC

Examples:
  kubectl getinfo scheduling pods                  # full summary of pods
  kubectl getinfo scheduling deployments -n prod   # deployments in prod
  kubectl getinfo scheduling tolerations pods      # only tolerations
  kubectl getinfo scheduling resources pods -A     # requests/limits everywhere

Use "kubectl getinfo scheduling <field> --help" for more information about a field.
""",
    "completion": """Usage: kubectl getinfo completion <bash|zsh|fish>

Print a shell completion script.

Examples:
  source <(kubectl-getinfo completion bash)
  source <(kubectl-getinfo completion zsh)
  kubectl-getinfo completion fish | source
""",
}

FIELD_HELP = {
    SchedulingField.TOLERATIONS: "List tolerations. Tolerations allow pods to be scheduled on nodes with matching taints.",
    SchedulingField.AFFINITY: "List affinity rules: nodeAffinity, podAffinity and podAntiAffinity.",
    SchedulingField.NODESELECTOR: "List nodeSelector, the simplest way to pin pods to nodes with specific labels.",
    SchedulingField.RESOURCES: "List resource requests and limits of every container.",
    SchedulingField.TOPOLOGY: "List topologySpreadConstraints, which spread pods across topology domains.",
    SchedulingField.PRIORITY: "List priorityClassName, priority and preemptionPolicy.",
    SchedulingField.RUNTIME: "List runtimeClassName, hostNetwork, hostPID and hostIPC.",
}


def field_help(field: SchedulingField) -> str:
    name = field.value
    return f"""Usage: kubectl getinfo scheduling {name} <resource-type> [resource-name...] [flags]

{FIELD_HELP[field]}

Examples:
  kubectl getinfo scheduling {name} pods
  kubectl getinfo scheduling {name} pods -A
  kubectl getinfo scheduling {name} deployments -n prod
  kubectl getinfo scheduling {name} pods -o yaml
"""


def command_help(command: str, targets: Optional[List[str]] = None) -> str:
    """
    Help page for `command`. For 'scheduling', a leading field name in
    `targets` selects that field's page.
    """
    targets = targets or []
    if command == "scheduling" and targets and targets[0].lower() in SchedulingField.names():
        page = field_help(SchedulingField.parse(targets[0].lower()))
    else:
        page = COMMAND_HELP[command]
    if command == "completion":
        return page
    return page + "\n" + QUERY_FLAGS
