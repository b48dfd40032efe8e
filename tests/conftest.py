import pytest

from gfc import LSTClass, LSTDocument

SAMPLE = "\r\n".join(
    [
        "# window settings",
        "class Window:",
        "\tstr title = \"Main Window\"",
        "\tint width = 800",
        "\tint height = 600 # pixels",
        "\tflt scale = 1.5",
        "\tbol resizable = true",
        "end",
        "class Build:",
        "\tlng timestamp = 1640995200000",
        "\tdbl ratio = 0.25",
        "\tstr author = \"0x1905\"",
        "end",
        "",
    ]
)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE


@pytest.fixture
def sample_document() -> LSTDocument:
    document = LSTDocument()
    document.set_class(
        LSTClass(
            name="Window",
            strings={"title": "Main Window", "empty": ""},
            integers={"width": 800, "depth": -3},
            floats={"scale": 1.5, "tenth": 0.1},
            longs={"timestamp": 1640995200000},
            booleans={"resizable": True, "hidden": False},
        )
    )
    document.set_class(LSTClass(name="Empty"))
    return document
