"""
Configuration schema for nvtrc.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME})
- Validation with error messages

Example config (nvtrc.yml):
    version: 1

    timestamps:
      raw_gpu: false

    export:
      time_divisor: ${NVTRC_TIME_DIVISOR}
      indent: 2

    logging:
      level: INFO
"""

import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Any

import yaml


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${NVTRC_TIME_DIVISOR} → os.environ.get('NVTRC_TIME_DIVISOR')
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}]+)\}'

        def replace(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                return match.group(0)  # Keep original if not found
            return env_value

        substituted = re.sub(pattern, replace, value)
        if substituted != value:
            # Let "2" or "false" from the environment become YAML scalars
            return yaml.safe_load(substituted)
        return value

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


@dataclass
class TimestampConfig:
    """Clock conversion policy."""
    raw_gpu: bool = False


@dataclass
class OutputConfig:
    """Diagnostic dump defaults."""
    show_devices: bool = True
    show_records: bool = False


@dataclass
class ExportConfig:
    """Chrome trace export settings."""
    time_divisor: float = 1.0
    indent: Optional[int] = None


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = 'WARNING'


@dataclass
class NvtrcConfig:
    """Root configuration."""

    version: int = 1
    timestamps: TimestampConfig = field(default_factory=TimestampConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path) -> 'NvtrcConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        data = _substitute_env_vars(data)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'NvtrcConfig':
        """Create from dictionary."""
        return cls(
            version=data.get('version', 1),
            timestamps=TimestampConfig(**(data.get('timestamps') or {})),
            output=OutputConfig(**(data.get('output') or {})),
            export=ExportConfig(**(data.get('export') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        if self.version != 1:
            errors.append(f"Unsupported config version: {self.version}")

        if not isinstance(self.export.time_divisor, (int, float)) or self.export.time_divisor <= 0:
            errors.append(f"Invalid time_divisor: {self.export.time_divisor}")

        if self.export.indent is not None and (
            not isinstance(self.export.indent, int) or self.export.indent < 0
        ):
            errors.append(f"Invalid indent: {self.export.indent}")

        if str(self.logging.level).upper() not in LOG_LEVELS:
            errors.append(f"Invalid logging level: {self.logging.level}")

        return errors


def load_config(path: Optional[Path] = None) -> NvtrcConfig:
    """Load config from file or return defaults."""
    if path and Path(path).exists():
        return NvtrcConfig.load(path)

    search_paths = [
        Path('./nvtrc.yml'),
        Path('./nvtrc.yaml'),
        Path.home() / '.nvtrc' / 'config.yml',
    ]

    for p in search_paths:
        if p.exists():
            return NvtrcConfig.load(p)

    return NvtrcConfig()


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# nvtrc Configuration
version: 1

timestamps:
  # Keep GPU globaltimer values instead of converting to CPU time
  raw_gpu: false

output:
  show_devices: true
  show_records: false

export:
  time_divisor: 1.0
  indent: null

logging:
  level: WARNING
"""
