#!/usr/bin/env python3
"""
KUBEGETINFO SHELL COMPLETION
----------------------------
Static completion scripts for bash, zsh and fish.

    source <(kubectl-getinfo completion bash)
    source <(kubectl-getinfo completion zsh)
    kubectl-getinfo completion fish | source

Author: KubeGetInfo Team
Date: 2026-10-18
"""

from kubegetinfo.core.config import CatalogOrder, MergePolicy
from kubegetinfo.extraction.extractor import SchedulingField

SHELLS = ("bash", "zsh", "fish")

COMMANDS = "labels annotations owner scheduling completion"
SUBCOMMANDS = " ".join(SchedulingField.names())
RESOURCE_TYPES = (
    "pods po deployments deploy services svc nodes no configmaps cm secrets "
    "statefulsets sts daemonsets ds replicasets rs ingresses ing jobs cronjobs cj "
    "persistentvolumes pv persistentvolumeclaims pvc namespaces ns "
    "serviceaccounts sa endpoints ep events ev networkpolicies netpol"
)
FLAGS = (
    "-n --namespace -A --all-namespaces -l --selector -o --output -c --color "
    "--kubeconfig --context --resource-merge --catalog-order -v --verbose -h --help"
)
# Flags whose value is the next word; that word is never a positional
VALUE_FLAGS = (
    "-n", "--namespace", "-l", "--selector", "-o", "--output",
    "--kubeconfig", "--context", "--resource-merge", "--catalog-order",
)
OUTPUT_FORMATS = "json yaml table"
MERGE_POLICIES = " ".join(p.value for p in MergePolicy)
CATALOG_ORDERS = " ".join(o.value for o in CatalogOrder)

BASH_TEMPLATE = r"""# bash completion for kubectl-getinfo

_kubectl_getinfo_completions() {
    local cur="${COMP_WORDS[COMP_CWORD]}"
    # Re-split on whitespace only: COMP_WORDS also breaks 'app=web' at '='
    local line="${COMP_LINE:0:COMP_POINT}" words=()
    read -ra words <<< "$line"
    [[ "$line" == *[[:space:]] ]] && words+=("")
    local last=$((${#words[@]} - 1))
    local prev="${words[last-1]}"

    case "$prev" in
        -o|--output)
            COMPREPLY=($(compgen -W "__OUTPUT__" -- "$cur"))
            return ;;
        -n|--namespace)
            COMPREPLY=($(compgen -W "$(kubectl get namespaces -o name 2>/dev/null | cut -d/ -f2)" -- "$cur"))
            return ;;
        --context)
            COMPREPLY=($(compgen -W "$(kubectl config get-contexts -o name 2>/dev/null)" -- "$cur"))
            return ;;
        --kubeconfig)
            COMPREPLY=($(compgen -f -- "$cur"))
            return ;;
        --resource-merge)
            COMPREPLY=($(compgen -W "__MERGE__" -- "$cur"))
            return ;;
        --catalog-order)
            COMPREPLY=($(compgen -W "__ORDER__" -- "$cur"))
            return ;;
        -l|--selector)
            return ;;
    esac

    if [[ "$cur" == -* ]]; then
        COMPREPLY=($(compgen -W "__FLAGS__" -- "$cur"))
        return
    fi

    local args=() skip=0 i
    for ((i=1; i < last; i++)); do
        if ((skip)); then
            skip=0
            continue
        fi
        case "${words[i]}" in
            __VALUE_FLAGS__) skip=1 ;;
            -*) ;;
            *) args+=("${words[i]}") ;;
        esac
    done

    if [[ ${#args[@]} -eq 0 ]]; then
        COMPREPLY=($(compgen -W "__COMMANDS__" -- "$cur"))
    elif [[ "${args[0]}" == "completion" ]]; then
        [[ ${#args[@]} -eq 1 ]] && COMPREPLY=($(compgen -W "bash zsh fish" -- "$cur"))
    elif [[ "${args[0]}" == "scheduling" && ${#args[@]} -eq 1 ]]; then
        COMPREPLY=($(compgen -W "__SUBCOMMANDS__ __RESOURCES__" -- "$cur"))
    elif [[ ${#args[@]} -eq 1 || ( "${args[0]}" == "scheduling" && ${#args[@]} -eq 2 ) ]]; then
        COMPREPLY=($(compgen -W "__RESOURCES__" -- "$cur"))
    fi
}

complete -F _kubectl_getinfo_completions kubectl-getinfo
"""

ZSH_TEMPLATE = r"""#compdef kubectl-getinfo
# zsh completion for kubectl-getinfo

_kubectl_getinfo() {
    case "${words[CURRENT-1]}" in
        (-o|--output) compadd __OUTPUT__; return ;;
        (-n|--namespace) compadd -- ${(f)"$(kubectl get namespaces -o name 2>/dev/null | cut -d/ -f2)"}; return ;;
        (--context) compadd -- ${(f)"$(kubectl config get-contexts -o name 2>/dev/null)"}; return ;;
        (--kubeconfig) _files; return ;;
        (--resource-merge) compadd __MERGE__; return ;;
        (--catalog-order) compadd __ORDER__; return ;;
        (-l|--selector) return ;;
    esac

    local -a args
    local i skip=0
    for (( i = 2; i < CURRENT; i++ )); do
        if (( skip )); then
            skip=0
            continue
        fi
        case "${words[i]}" in
            (__VALUE_FLAGS__) skip=1 ;;
            (-*) ;;
            (*) args+=("${words[i]}") ;;
        esac
    done

    if [[ "${words[CURRENT]}" == -* ]]; then
        compadd -- __FLAGS__
    elif (( ${#args} == 0 )); then
        compadd __COMMANDS__
    elif [[ "${args[1]}" == "completion" ]]; then
        (( ${#args} == 1 )) && compadd bash zsh fish
    elif [[ "${args[1]}" == "scheduling" ]] && (( ${#args} == 1 )); then
        compadd __SUBCOMMANDS__ __RESOURCES__
    elif (( ${#args} == 1 )) || [[ "${args[1]}" == "scheduling" && ${#args} -eq 2 ]]; then
        compadd __RESOURCES__
    fi
}

compdef _kubectl_getinfo kubectl-getinfo
"""

FISH_TEMPLATE = r"""# fish completion for kubectl-getinfo

complete -c kubectl-getinfo -f
complete -c kubectl-getinfo -n "__fish_use_subcommand" -a "__COMMANDS__"
complete -c kubectl-getinfo -n "__fish_seen_subcommand_from scheduling" -a "__SUBCOMMANDS__"
complete -c kubectl-getinfo -n "__fish_seen_subcommand_from completion" -a "bash zsh fish"
complete -c kubectl-getinfo -n "__fish_seen_subcommand_from labels annotations owner scheduling" -a "__RESOURCES__"
complete -c kubectl-getinfo -s n -l namespace -r -a "(kubectl get namespaces -o name 2>/dev/null | string replace namespace/ '')" -d "Namespace"
complete -c kubectl-getinfo -s A -l all-namespaces -d "All namespaces"
complete -c kubectl-getinfo -s l -l selector -r -d "Label selector"
complete -c kubectl-getinfo -s o -l output -r -a "__OUTPUT__" -d "Output format"
complete -c kubectl-getinfo -s c -l color -d "Colorize JSON output"
complete -c kubectl-getinfo -l kubeconfig -r -F -d "Path to the kubeconfig file"
complete -c kubectl-getinfo -l context -r -a "(kubectl config get-contexts -o name 2>/dev/null)" -d "Kubeconfig context"
complete -c kubectl-getinfo -l resource-merge -r -a "__MERGE__" -d "Per-container resource merge policy"
complete -c kubectl-getinfo -l catalog-order -r -a "__ORDER__" -d "Catalog order for resource resolution"
complete -c kubectl-getinfo -s v -l verbose -d "Debug logging"
complete -c kubectl-getinfo -s h -l help -d "Show help"
"""

TEMPLATES = {"bash": BASH_TEMPLATE, "zsh": ZSH_TEMPLATE, "fish": FISH_TEMPLATE}


def generate_completion(shell: str) -> str:
    """Returns the completion script for `shell`; ValueError for unknown shells."""
    template = TEMPLATES.get((shell or "").lower())
    if template is None:
        raise ValueError(f"unsupported shell '{shell}'. Supported shells: {', '.join(SHELLS)}")
    return (template
            .replace("__VALUE_FLAGS__", "|".join(VALUE_FLAGS))
            .replace("__COMMANDS__", COMMANDS)
            .replace("__SUBCOMMANDS__", SUBCOMMANDS)
            .replace("__RESOURCES__", RESOURCE_TYPES)
            .replace("__FLAGS__", FLAGS)
            .replace("__OUTPUT__", OUTPUT_FORMATS)
            .replace("__MERGE__", MERGE_POLICIES)
            .replace("__ORDER__", CATALOG_ORDERS))
