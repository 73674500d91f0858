import warnings
from typing import Tuple

from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.core.faults import RunResult
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.cpu import Dcpu16Cpu
from dcpu_core_tracer.loader.loader import ProgramLoader
from .models import SystemConfig, CpuInitialState

# @intent:responsibility システム構成（Config）に基づいて、AddressSpaceとCPUを生成し、プログラムと初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Dcpu16Cpu, AddressSpace]:
        space = AddressSpace(config.address_policy)
        cpu = Dcpu16Cpu(space)

        loader = ProgramLoader()
        loader.load_words(space, config.program.words, config.program.origin)
        if config.program.file:
            loader.load_hex_file(config.program.file, space, config.program.origin)

        cpu.set_symbol_map(config.symbols)
        self.apply_initial_state(cpu, config.initial_state)
        return cpu, space

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    def apply_initial_state(self, cpu: Dcpu16Cpu, config_state: CpuInitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値を適用します。
        未知のレジスタ名は警告の上で無視します。
        """
        cpu.reset(config_state.pc)
        cpu.write(Register.SP, config_state.sp)
        for reg_name, value in config_state.registers.items():
            try:
                reg = Register.from_name(reg_name)
            except ValueError:
                warnings.warn(f"Unknown register '{reg_name}' in initial_state, ignoring")
                continue
            cpu.write(reg, value)

    # @intent:responsibility Configからシステムを構築し、設定された命令数上限でrunします。
    def build_and_run(self, config: SystemConfig) -> Tuple[Dcpu16Cpu, RunResult]:
        cpu, _ = self.build_system(config)
        result = cpu.run(start_address=config.initial_state.pc, max_steps=config.max_steps)
        return cpu, result
