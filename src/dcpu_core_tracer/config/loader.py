import os
from typing import Any, Dict

import yaml

from dcpu_core_tracer.transport.address_space import AddressPolicy
from .models import CpuInitialState, ProgramImage, SystemConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        config = self._parse_config(data)
        # プログラムファイルは設定ファイルの場所を基準に解決する
        if config.program.file and not os.path.isabs(config.program.file):
            config.program.file = os.path.join(os.path.dirname(os.path.abspath(path)), config.program.file)
        return config

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        arch = str(data.get("architecture", "DCPU16")).upper()
        if arch != "DCPU16":
            raise ValueError(f"Unsupported architecture: {arch}")

        policy_name = str(data.get("address_policy", "sparse")).lower()
        try:
            policy = AddressPolicy(policy_name)
        except ValueError:
            raise ValueError(f"Unknown address policy: {policy_name}") from None

        max_steps = data.get("max_steps")
        if max_steps is not None:
            max_steps = self._parse_int(max_steps)

        # Parse Initial State
        initial_state_data = data.get("initial_state") or {}
        initial_state = CpuInitialState(
            pc=self._parse_int(initial_state_data.get("pc", 0)),
            sp=self._parse_int(initial_state_data.get("sp", 0)),
            registers={
                str(name): self._parse_int(value)
                for name, value in (initial_state_data.get("registers") or {}).items()
            }
        )

        # Parse Program
        program_data = data.get("program") or {}
        program = ProgramImage(
            origin=self._parse_int(program_data.get("origin", 0)),
            words=[self._parse_int(w) for w in program_data.get("words", [])],
            file=program_data.get("file"),
        )

        symbols = {
            str(name): self._parse_int(addr)
            for name, addr in (data.get("symbols") or {}).items()
        }

        return SystemConfig(
            architecture=arch,
            address_policy=policy,
            max_steps=max_steps,
            initial_state=initial_state,
            program=program,
            symbols=symbols,
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
