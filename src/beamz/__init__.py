from typing import Any

app_name = "beamz"


def __getattr__(name: str) -> Any:
    """Lazy-load attributes of the beamz package.

    The CLI entry point has to setup logging before any module that creates a \
    logger is loaded. Loading `beamz.cli` entails loading `beamz` first, so the \
    public attributes cannot be imported eagerly here.

    Args:
        name: Name of the attribute to load.

    Raises:
        AttributeError: Raised if the name doesn't match a lazy-loadable attribute.

    Returns:
        Lazy-loaded attribute.
    """
    match name:
        case "BeamCompiler":
            from .building.compiling import BeamCompiler

            return BeamCompiler
        case "OutputSink":
            from .models.compilation import OutputSink

            return OutputSink
        case _:
            msg = f"cannot find the attribute {name} in module {__name__}"
            raise AttributeError(msg)
