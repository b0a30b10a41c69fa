#!/usr/bin/env python3

"""
CPU Debugger

When live, one line is printed for every instruction executed, just before it
changes anything:

    V: Vf..V0 I: index DT: delay ST: sound PC: address OP: opcode IN: mnemonic

The registers are listed most significant (Vf) first, so the flag register is
always at the front of the line.  PC is the address the instruction was fetched
from, not the address of the next one.

Crash reports use the verbose form, which adds two more lines for the RPL
flags (in the same order as the V registers) and the call stack (oldest
return address first).
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


def _hex_registers(registers):
    return "".join("{:02x}".format(registers[reg_num]) for reg_num in range(15, -1, -1))


class Debugger:
    def __init__(self, live=False):
        self.live = live

    def debug(self, cpu, instruction, verbose=False):
        machine = cpu.machine
        lines = [
            "V: 0x{} I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}".format(
                _hex_registers(machine.v), machine.i, machine.dt, machine.st, cpu.debug_pc, cpu.opcode, instruction
            )
        ]

        if verbose:
            return_addresses = machine.stack.get_items()
            lines.append("RPL: 0x" + _hex_registers(machine.rpl))
            lines.append(
                "Stack: " + (" ".join("0x{:03x}".format(address) for address in return_addresses) or "(Empty)")
            )

        return "\n".join(lines)

    def set_live(self, enabled):
        self.live = bool(enabled)

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))
