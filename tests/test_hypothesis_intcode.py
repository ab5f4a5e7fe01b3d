import pytest
from hypothesis import given, settings, assume
from hypothesis.strategies import composite
from hypothesis import strategies as st

from intcode.core.interpreter import IntcodeMachine, MachineState
from intcode.core.opcodes import Opcode
from intcode.errors import IntcodeError, OutOfBoundsError, UnknownOpcodeError
from intcode.search import evaluate_direct, search

# Cell values are signed and unbounded; keep them moderate so failures are readable
cell_strategy = st.integers(min_value=-10_000, max_value=10_000)
binary_opcode_strategy = st.sampled_from([Opcode.ADD, Opcode.MUL])


@composite
def binary_instruction_program(draw):
    """A program starting with ADD/MUL whose three addresses are all in bounds."""
    tail = draw(st.lists(cell_strategy, min_size=0, max_size=20))
    size = 4 + len(tail)
    opcode = draw(binary_opcode_strategy)
    a = draw(st.integers(min_value=0, max_value=size - 1))
    b = draw(st.integers(min_value=0, max_value=size - 1))
    c = draw(st.integers(min_value=0, max_value=size - 1))
    return [int(opcode), a, b, c] + tail


@settings(max_examples=300, deadline=None)
@given(program=binary_instruction_program())
def test_single_step_uses_pre_write_operands(program):
    """
    One step of ADD/MUL stores the result of the operands as they were before
    the write, even when the destination aliases a source or the instruction.
    """
    opcode, a, b, c = program[:4]
    before = list(program)
    expected_value = before[a] + before[b] if opcode == Opcode.ADD else before[a] * before[b]

    machine = IntcodeMachine(program)
    machine.step()

    expected = list(before)
    expected[c] = expected_value
    assert machine.memory.snapshot() == expected
    assert machine.pc == 4


@composite
def program_with_unknown_opcode(draw):
    opcode = draw(cell_strategy.filter(lambda v: v not in (1, 2, 99)))
    tail = draw(st.lists(cell_strategy, min_size=0, max_size=10))
    return [opcode] + tail


@settings(max_examples=200, deadline=None)
@given(program=program_with_unknown_opcode())
def test_unknown_opcode_faults_without_mutation(program):
    machine = IntcodeMachine(program)
    with pytest.raises(UnknownOpcodeError):
        machine.step()
    assert machine.memory.snapshot() == program
    assert machine.state == MachineState.FAULTED


@composite
def program_with_bad_address(draw):
    """ADD/MUL where at least one of the three addresses is outside memory."""
    tail = draw(st.lists(cell_strategy, min_size=0, max_size=10))
    size = 4 + len(tail)
    in_bounds = st.integers(min_value=0, max_value=size - 1)
    out_of_bounds = st.one_of(
        st.integers(min_value=size, max_value=size + 1000),
        st.integers(min_value=-1000, max_value=-1),
    )
    bad_slot = draw(st.integers(min_value=0, max_value=2))
    addresses = [draw(out_of_bounds) if i == bad_slot else draw(in_bounds) for i in range(3)]
    return [int(draw(binary_opcode_strategy))] + addresses + tail


@settings(max_examples=200, deadline=None)
@given(program=program_with_bad_address())
def test_bad_address_faults_without_mutation(program):
    machine = IntcodeMachine(program)
    with pytest.raises(OutOfBoundsError):
        machine.step()
    assert machine.memory.snapshot() == program


@composite
def straight_line_program(draw):
    """A run of ADD/MUL instructions over small data, terminated by HALT or not."""
    count = draw(st.integers(min_value=0, max_value=8))
    data = draw(st.lists(st.integers(min_value=-5, max_value=5), min_size=1, max_size=6))
    code_size = count * 4 + 1
    size = code_size + len(data)
    # Only address the data region so the code is never rewritten
    data_address = st.integers(min_value=code_size, max_value=size - 1)
    program = []
    for _ in range(count):
        program.append(int(draw(binary_opcode_strategy)))
        program.extend(draw(data_address) for _ in range(3))
    program.append(int(Opcode.HALT))
    return program + data


@settings(max_examples=200, deadline=None)
@given(program=straight_line_program())
def test_straight_line_programs_halt(program):
    machine = IntcodeMachine(program).run_to_completion()
    assert machine.state == MachineState.HALTED
    assert machine.pc == machine.steps * 4
    assert machine.peek(machine.pc) == Opcode.HALT


# --- Search driver ---

@composite
def patchable_program(draw):
    """[op, noun, verb, dest, HALT, data...] with dest inside memory."""
    data = draw(st.lists(st.integers(min_value=-3, max_value=3), min_size=0, max_size=4))
    size = 5 + len(data)
    dest = draw(st.integers(min_value=0, max_value=size - 1))
    assume(dest != 4)  # keep the HALT in place
    return [int(draw(binary_opcode_strategy)), 0, 0, dest, int(Opcode.HALT)] + data


@settings(max_examples=100, deadline=None)
@given(program=patchable_program(), target=st.integers(min_value=-10, max_value=10))
def test_search_returns_first_match_in_scan_order(program, target):
    values = range(0, len(program) + 2)  # includes out-of-bounds candidates

    expected = None
    for noun in values:
        for verb in values:
            try:
                result = evaluate_direct(program, noun, verb)
            except IntcodeError:
                continue
            if result == target:
                expected = (noun, verb)
                break
        if expected is not None:
            break

    assert search(program, target, values, values) == expected


@settings(max_examples=50, deadline=None)
@given(program=patchable_program(), noun=st.integers(0, 4), verb=st.integers(0, 4))
def test_evaluate_direct_is_repeatable(program, noun, verb):
    original = list(program)
    try:
        first = evaluate_direct(program, noun, verb)
    except IntcodeError:
        return
    assert evaluate_direct(program, noun, verb) == first
    assert program == original
