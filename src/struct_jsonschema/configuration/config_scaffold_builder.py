"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "struct-jsonschema.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Schema generation configuration for struct-jsonschema.
# Replace every <REQUIRED> placeholder before running generate.
# Relative paths are resolved against the directory of this file.

source:
  # Go source files or package directories (package directories are not scanned recursively).
  paths:
    - "<REQUIRED>"
  # include_test_files: false

# Struct type names to generate one schema document for.
types:
  - "<REQUIRED>"

output:
  # directory: "schemas"
  # file_name: "{type_name}.schema.json"
  # indent: 2

synthesis:
  # indirection_only marks only fields declared as pointers to exported types as required.
  # non_pointer marks every non-pointer field as required instead.
  # required_policy: "indirection_only"
  # Walk fields whose type is another struct of the same package into nested objects.
  # expand_nested_structs: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
