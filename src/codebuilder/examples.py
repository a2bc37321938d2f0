"""
Example program builder.

Builds two C-like functions: `main`, closed through a plain push/pop, and
`multiply`, whose try/catch tail is staged in reading order and left on the
deferred stack for finalize() to drain.
"""
from typing import Optional

from codebuilder.builder import CodeBuilder
from codebuilder.config import BuilderConfig
from codebuilder.model import Indent


def build_example_program(indent_base: int = 0, config: Optional[BuilderConfig] = None) -> CodeBuilder:
    code = CodeBuilder(indent_base, config=config)

    code.append("void main() {\n", Indent.OPEN)
    code.push("}\n")
    code.append("int a = 5;\n")
    code.append("multiply(a);\n")
    code.pop()

    code.append("\n")
    code.append("void multiply(int v) {\n", Indent.OPEN)
    code.push("}\n")
    code.append("try {\n", Indent.OPEN)

    # Closing tail of the try block, written top to bottom
    code.stage("} catch(Exception e) {\n", Indent.CLOSE_THEN_OPEN)
    code.stage("import std.stdio;\n")
    code.stage("writeln(`Exception is bad but I don't care.`);\n")
    code.stage("}\n", Indent.CLOSE)
    code.commit_stage_to_stack()

    code.append("return v * ")
    code.raw_append(str(76) + ";\n")

    return code
