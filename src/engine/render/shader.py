"""
どこで: `engine.render.shader`
何を: 頂点色付き三角形用の GLSL（固定機能の glVertexPointer/glColorPointer 相当）と生成ヘルパ。
なぜ: コアプロファイルには固定機能が無いため、同じ見た目を最小のシェーダで再現するため。

- `smooth=True` で頂点色を補間（GL_SMOOTH）、False で flat（GL_FLAT）。
- 行列は `projection`・`model_view` の 2 つの uniform（列優先で書き込む）。
"""

from __future__ import annotations

from typing import Any

_VERTEX_SHADER = """
#version 330
uniform mat4 projection;
uniform mat4 model_view;

in vec3 in_position;
in vec4 in_color;

{interp} out vec4 v_color;

void main() {{
    v_color = in_color;
    gl_Position = projection * model_view * vec4(in_position, 1.0);
}}
"""

_FRAGMENT_SHADER = """
#version 330
{interp} in vec4 v_color;
out vec4 f_color;

void main() {{
    f_color = v_color;
}}
"""


def shader_sources(*, smooth: bool = True) -> tuple[str, str]:
    """(vertex, fragment) のソースを返す。"""
    interp = "smooth" if smooth else "flat"
    return (
        _VERTEX_SHADER.format(interp=interp),
        _FRAGMENT_SHADER.format(interp=interp),
    )


def create_program(ctx: Any, *, smooth: bool = True) -> Any:
    """ModernGL コンテキストにプログラムを作る。"""
    vertex_shader, fragment_shader = shader_sources(smooth=smooth)
    return ctx.program(vertex_shader=vertex_shader, fragment_shader=fragment_shader)


__all__ = ["shader_sources", "create_program"]
