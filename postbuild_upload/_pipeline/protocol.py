"""Post-build step protocol and configuration schema types.

A host build system drives a step through two calls: execute() runs it
against a workspace and describe_configuration() tells the host which
settings the step understands.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Literal, Mapping, Optional, Protocol, Tuple

from ..validators import FormValidation

if TYPE_CHECKING:
    from .result import StepResult

# Global settings are shared by every job; job settings belong to one job.
ConfigScope = Literal["global", "job"]

ProgressListener = Callable[[str], None]


@dataclass(frozen=True)
class BuildContext:
    """
    What the host hands to a step for one invocation.

    Attributes:
        workspace: Local path of the build workspace
        listener: Optional callable receiving each progress line
    """

    workspace: Path
    listener: Optional[ProgressListener] = None


@dataclass(frozen=True)
class ConfigField:
    """
    Description of a single configuration setting.

    Attributes:
        name: Setting name as the host stores it
        type: Value type ("string" or "boolean")
        scope: "global" or "job"
        description: Human-readable description
        default: Default value, if any
        env_var: Environment variable the CLI reads it from
        validator: Optional callable grading a value
    """

    name: str
    type: Literal["string", "boolean"]
    scope: ConfigScope
    description: str
    default: Any = None
    env_var: Optional[str] = None
    validator: Optional[Callable[..., FormValidation]] = field(default=None, compare=False)


@dataclass(frozen=True)
class ConfigurationSchema:
    """The settings a step accepts."""

    title: str
    fields: Tuple[ConfigField, ...] = ()

    def __iter__(self) -> Iterator[ConfigField]:
        return iter(self.fields)

    def get(self, name: str) -> Optional[ConfigField]:
        """
        Get a field by name.

        Args:
            name: Field name

        Returns:
            ConfigField if found, None otherwise
        """
        for config_field in self.fields:
            if config_field.name == name:
                return config_field
        return None

    def validate(self, values: Mapping[str, Any]) -> Dict[str, FormValidation]:
        """
        Run each field's validator against the given values.

        Fields without a validator are reported as OK.

        Args:
            values: Mapping of field name to value

        Returns:
            Mapping of field name to FormValidation
        """
        results: Dict[str, FormValidation] = {}
        for config_field in self.fields:
            if config_field.validator is None:
                results[config_field.name] = FormValidation.ok()
            else:
                results[config_field.name] = config_field.validator(values.get(config_field.name))
        return results


class PostBuildStep(Protocol):
    """
    Protocol for steps that run after a build.

    Example:
        class NotifyStep:
            name = "notify"

            def execute(self, context: BuildContext) -> StepResult:
                ...

            def describe_configuration(self) -> ConfigurationSchema:
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this step."""
        ...

    def execute(self, context: BuildContext) -> "StepResult":
        """
        Run the step against the given workspace.

        Implementations never raise; every failure becomes a FAILURE result.
        """
        ...

    def describe_configuration(self) -> ConfigurationSchema:
        """Describe the settings this step reads."""
        ...
