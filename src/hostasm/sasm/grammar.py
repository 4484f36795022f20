# type: ignore
''' Single line grammar '''

import pyparsing as pp

from hostasm.common.tokens import Instruction, RegisterRef, Literal


COMMENT = ';;'

id = pp.Regex('[A-Za-z_][A-Za-z0-9_]*')
opcode = pp.Regex('[A-Za-z_.][A-Za-z0-9_.]*').set_parse_action(lambda r: Instruction(r[0]))

reg_ref = (pp.Suppress('[') + id + pp.Suppress(']')).set_parse_action(lambda r: RegisterRef(r[0]))

float_const = pp.Regex('[+-]?[0-9]+\\.[0-9]+').set_parse_action(lambda r: Literal(float(r[0])))
int_const = pp.Regex('[+-]?[0-9]+').set_parse_action(lambda r: Literal(int(r[0])))

# Float first, otherwise the integer part matches alone
operand = reg_ref | float_const | int_const

operands = pp.Optional(operand + pp.ZeroOrMore(pp.Optional(pp.Suppress(',')) + operand))

line = opcode + operands + pp.StringEnd()
