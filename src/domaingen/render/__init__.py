from domaingen.render.renderer import LEGACY_OUTPUTS, generate, get_jinja_env, render_type

__all__ = ["LEGACY_OUTPUTS", "generate", "get_jinja_env", "render_type"]
