import logging as lg
from typing import Callable

import rpnvm.common.ops as ops
import rpnvm.common.isa as isa
from rpnvm.common.hwconf import ORIGIN
from rpnvm.common.errors import (
    Fault, ReservedInstruction, StackUnderflow, StackOverflow, DivisionByZero, PcOutOfBounds
)
from rpnvm.runtime.loader import Machine, State


Trace = Callable[[str], None]


def wrap32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class CPU():
    machine: Machine
    trace: Trace | None

    def __init__(self, machine: Machine, trace: Trace | None = None):
        self.machine = machine
        self.regs = machine.regs
        self.trace = trace

    # - Helpers - #

    def debug_dump(self):
        lg.debug(f'PC:{self.regs.pc} SP:{self.regs.sp} {self.regs.state.name}')

    def emit(self, line: str):
        if self.trace is not None:
            self.trace(line)

    def depth(self) -> int:
        return ORIGIN - self.regs.sp

    def tos(self) -> int | None:
        if self.depth() == 0:
            return None

        return self.machine.read_value(self.regs.sp)

    def emit_tos(self):
        tos = self.tos()
        self.emit('tos: empty' if tos is None else f'tos: {tos}')

    def fetch(self) -> int:
        pc = self.regs.pc

        if not 0 <= pc < self.machine.size:
            raise PcOutOfBounds(f'no memory at {pc}')

        word = self.machine.read_word(pc)
        self.regs.pc += 1
        return word

    def do_push(self, value: int):
        sp = self.regs.sp - 1

        if not 0 <= sp < ORIGIN:
            raise StackOverflow(f'stack full ({self.depth()} values)')

        self.regs.sp = sp
        self.machine.write_value(sp, value)

    def do_pop(self) -> int:
        value = self.machine.read_value(self.regs.sp)
        self.regs.sp += 1
        return value

    def operands(self, mnemonic: str) -> tuple[int, int]:
        ''' Returns (second, top) without popping them '''
        if self.depth() < 2:
            raise StackUnderflow(f'{mnemonic} needs two values, stack holds {self.depth()}')

        sp = self.regs.sp
        return (self.machine.read_value(sp + 1), self.machine.read_value(sp))

    def arithm_pair(self, mnemonic: str, op: Callable[[int, int], int]):
        (second, top) = self.operands(mnemonic)
        result = wrap32(op(second, top))

        self.do_pop()
        self.do_pop()
        self.do_push(result)

        self.emit(f'{mnemonic} {second} {top}')
        self.emit_tos()

    # - Operations - #

    def push(self, value: int):
        self.do_push(value)
        self.emit(f'push {value}')
        self.emit_tos()

    def hlt(self):
        self.regs.state = State.HALTED
        self.emit('halt')
        self.emit_tos()

    def add(self):
        self.arithm_pair('add', lambda a, b: a + b)

    def sub(self):
        self.arithm_pair('sub', lambda a, b: a - b)

    def mul(self):
        self.arithm_pair('mul', lambda a, b: a * b)

    def div(self):
        (_, top) = self.operands('div')

        if top == 0:
            raise DivisionByZero('division by zero')

        self.arithm_pair('div', trunc_div)

    HANDLERS = {
        ops.HLT: hlt,
        ops.ADD: add,
        ops.SUB: sub,
        ops.MUL: mul,
        ops.DIV: div,
    }

    # -- Implementation -- #

    def dispatch(self, instruction: isa.Instruction):
        if isinstance(instruction, isa.Push):
            self.push(instruction.value)

        elif isinstance(instruction, isa.Primitive):
            handler = self.HANDLERS[instruction.op]
            handler(self)

        else:
            raise ReservedInstruction(f'reserved instruction {instruction}')

    def fail(self, fault: Fault, pc: int):
        fault.pc = pc
        self.regs.pc = pc
        self.regs.state = State.FAULTED
        self.regs.fault = fault
        lg.debug(f'Fault {fault}')

    def exec_next(self):
        if self.regs.state != State.RUNNING:
            return

        pc = self.regs.pc

        try:
            instruction = isa.decode(self.fetch())
            self.dispatch(instruction)

        except Fault as fault:
            self.fail(fault, pc)
            raise

        self.debug_dump()

    def run(self) -> int | None:
        while self.regs.state == State.RUNNING:
            self.exec_next()

        if self.regs.fault is not None:
            raise self.regs.fault

        return self.tos()
