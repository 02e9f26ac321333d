#!/usr/bin/env python3
"""
uidlresolve - UIDL lowering pass

Resolves an abstract UIDL component against a target elements mapping and
writes the resolved UIDL, ready for a code generator.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Resolution:
    - Element substitution from the mapping table
    - Children template splicing and attribute merging
    - Local dependency path inference
    - Asset URL prefixing in styles and url/srcset attributes
    - Unique, deterministic node keys within the component

Usage:
    uidlresolve inputdir/ outputdir/ --inputFile card.json --mappingFile html.yaml

    The input file holds either a content node or a component object with
    a "content" node. The resolved document keeps the same shape.

Examples:
    # Basic resolution
    uidlresolve . output/ --inputFile card.json --mappingFile html-mapping.yaml

    # With CDN assets and a components folder for local dependencies
    uidlresolve . output/ --inputFile card.json --mappingFile html-mapping.yaml \\
        --assetsPrefix https://cdn.example.com --localDependenciesPrefix ../components/

    # Verbose output
    uidlresolve . output/ --inputFile card.json --mappingFile html-mapping.yaml -vv
"""

import json
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .config import appsettings
from .lib import component_resolve, __version__, LOG, state_connectToLogger
from .lib.naming import nodes_walk
from .models import (
    ProgramState,
    pipeline,
    UIDLResolveError,
    elementsMapping_fromDict,
    node_fromDict,
    node_toDict,
)


# Define CLI arguments
parser = ArgumentParser(
    description="uidlresolve - resolve UIDL components against a target elements mapping",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input UIDL (.json) file (relative to inputdir)"
)

parser.add_argument(
    "--mappingFile",
    required=True,
    type=str,
    help="Elements mapping (.yaml or .json) file (relative to inputdir)",
)

parser.add_argument(
    "--assetsPrefix",
    default=appsettings.default_assets_prefix,
    type=str,
    help="Prefix for local asset references in styles and url/srcset attributes",
)

parser.add_argument(
    "--localDependenciesPrefix",
    default=appsettings.local_dependencies_prefix,
    type=str,
    help="Path prefix for local dependencies declared without a path",
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="Output filename within outputdir. Defaults to the input filename",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the UIDL file
            - mappingSourceFile: Resolved path to the mapping file
            - resolvedOutputFile: Path of the resolved UIDL output
            - envOK: True if environment is valid

    Exits:
        1 if the input or mapping file is not found
    """

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    mapping_file = state.inputdir / state.mappingFile
    if not mapping_file.exists():
        print(f"Error: Mapping file not found: {mapping_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.mappingSourceFile = mapping_file
    LOG(f"Mapping file: {mapping_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.resolvedOutputFile = state.outputdir / (state.outputFile or input_file.name)
    LOG(f"Output file: {state.resolvedOutputFile}", level=2)

    state.envOK = True
    return state


def source_load(inputstate: ProgramState) -> ProgramState:
    """
    Read the UIDL document from disk.

    Returns:
        ProgramState with added field:
            - uidlSource: The UIDL document as a dict

    Exits:
        1 if the file cannot be read or is not a JSON object
    """

    state = inputstate.copy()

    LOG("Reading UIDL file...", level=1)

    try:
        state.uidlSource = json.loads(state.inputSourceFile.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(state.uidlSource, dict):
        print("Error: UIDL document must be a JSON object", file=sys.stderr)
        sys.exit(1)

    return state


def mapping_load(inputstate: ProgramState) -> ProgramState:
    """
    Read the elements mapping table from disk.

    YAML is a superset of JSON, so both formats load through PyYAML.

    Returns:
        ProgramState with added field:
            - elementsMapping: ElementsMapping table

    Exits:
        1 if the file cannot be read or holds an unusable entry
    """

    state = inputstate.copy()

    LOG("Reading elements mapping...", level=1)

    try:
        with open(state.mappingSourceFile, "r", encoding="utf-8") as f:
            raw_mapping = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Error reading mapping file: {e}", file=sys.stderr)
        sys.exit(1)

    # Mapping files may wrap the table as {"elements": {...}}
    if isinstance(raw_mapping, dict) and isinstance(raw_mapping.get("elements"), dict):
        raw_mapping = raw_mapping["elements"]

    try:
        state.elementsMapping = elementsMapping_fromDict(raw_mapping)
    except (UIDLResolveError, AttributeError) as e:
        print(f"Mapping error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Loaded {len(state.elementsMapping)} element mappings", level=2)
    return state


def uidl_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Resolve the UIDL content tree against the elements mapping.

    Returns:
        ProgramState with added field:
            - resolveResult: Dict containing:
                - status: bool (resolution success)
                - output_file: str (path of the resolved UIDL)
                - node_count: int (number of keyed nodes)

    Exits:
        1 if the document has no content node or resolution fails
    """

    state = inputstate.copy()

    LOG("Resolving UIDL content...", level=1)

    document = state.uidlSource or {}
    is_component = "type" not in document and isinstance(document.get("content"), dict)
    content_dict = document["content"] if is_component else document

    try:
        content = node_fromDict(content_dict)
        component_resolve(
            content,
            state.elementsMapping or {},
            state.localDependenciesPrefix,
            state.assetsPrefix,
        )
    except (KeyError, TypeError, UIDLResolveError) as e:
        print(f"Resolution error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    resolved_content = node_toDict(content)
    if is_component:
        state.uidlSource = {**document, "content": resolved_content}
    else:
        state.uidlSource = resolved_content

    state.resolveResult = {
        "status": True,
        "output_file": str(state.resolvedOutputFile),
        "node_count": sum(1 for _ in nodes_walk(content)),
    }
    LOG(f"Resolution complete: {state.resolveResult['node_count']} nodes", level=2)

    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the resolved UIDL document as JSON.

    Exits:
        1 if the file cannot be written
    """

    state = inputstate.copy()

    try:
        state.resolvedOutputFile.write_text(
            json.dumps(state.uidlSource, indent=appsettings.output_indent, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.resolvedOutputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display resolution results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if resolveResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.resolveResult:
        print("Error: Resolution failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Resolution successful!", level=1)
    LOG(f"  Output: {state.resolveResult['output_file']}", level=1)
    LOG(f"  Nodes:  {state.resolveResult['node_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="uidlresolve - UIDL lowering pass",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - resolve a UIDL component against an elements mapping.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and environment
        2. source_load: Read the UIDL document
        3. mapping_load: Read the elements mapping table
        4. uidl_resolve: Resolve and key the content tree
        5. results_write: Write the resolved document
        6. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_load, mapping_load, uidl_resolve, results_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
