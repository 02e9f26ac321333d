"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .uidl import ElementsMapping


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the resolution pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the resolution progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, mappingFile,
                   assetsPrefix, localDependenciesPrefix, outputFile
        - env_check: inputSourceFile, mappingSourceFile, resolvedOutputFile, envOK
        - source_load: uidlSource
        - mapping_load: elementsMapping
        - uidl_resolve: resolveResult (uidlSource now holds the resolved UIDL)
        - results_write: (writes resolvedOutputFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the UIDL and mapping files
        outputdir: Base output directory for the resolved UIDL
        verbosity: Logging verbosity level (1-3)
        inputFile: Input UIDL JSON filename (relative to inputdir)
        mappingFile: Elements mapping YAML/JSON filename (relative to inputdir)
        assetsPrefix: Optional prefix for local asset references
        localDependenciesPrefix: Prefix for inferred local dependency paths
        outputFile: Output filename (defaults to the input filename)
        envOK: Environment validation passed
        inputSourceFile: Resolved path to input UIDL file
        mappingSourceFile: Resolved path to mapping file
        resolvedOutputFile: Path the resolved UIDL is written to
        uidlSource: Loaded UIDL document (dict), resolved in place
        elementsMapping: Elements mapping table built from mappingFile
        resolveResult: Resolution results (output_file, node_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    mappingFile: str = field(default="")
    assetsPrefix: Optional[str] = field(default=None)
    localDependenciesPrefix: str = field(default="./")
    outputFile: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    mappingSourceFile: Path = field(default=Path("/"))
    resolvedOutputFile: Path = field(default=Path("/"))
    uidlSource: Optional[Dict[str, Any]] = field(default=None)
    elementsMapping: Optional["ElementsMapping"] = field(default=None)
    resolveResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, mappingFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for resolution output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Drop argparse entries ProgramState does not know about
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_load,
            mapping_load,
            uidl_resolve,
            results_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
