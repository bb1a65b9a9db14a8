from pathlib import Path

import pytest

from dijkstra import ShortestPathEngine
from graph import Graph
from visualize import (
    animate_path,
    build_networkx_graph,
    compute_layout,
    distance_labels,
    draw_static_figure,
    route_edges,
    settle_order,
)
from visualize import main as visualize_main


DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _build_graph() -> Graph:
    return Graph(
        ["u", "v", "x", "y", "z"],
        [("u", "x", 2), ("u", "y", 5), ("x", "y", 1), ("x", "v", 6), ("y", "v", 2)],
    )


def test_build_networkx_graph() -> None:
    graph_nx = build_networkx_graph(_build_graph())

    assert set(graph_nx.nodes) == {"u", "v", "x", "y", "z"}
    assert graph_nx.number_of_edges() == 5
    assert graph_nx["v"]["x"]["weight"] == 6


def test_route_edges() -> None:
    assert route_edges(["u", "x", "y"]) == [("u", "x"), ("x", "y")]
    assert route_edges(["u"]) == []


def test_distance_labels_mark_unreachable() -> None:
    labels = distance_labels(ShortestPathEngine(_build_graph(), "u"))

    assert labels["v"] == "v\n5"
    assert labels["z"] == "z\n∞"


def test_draw_static_figure_saves_image(tmp_path: Path) -> None:
    graph = _build_graph()
    engine = ShortestPathEngine(graph, "u")
    graph_nx = build_networkx_graph(graph)
    output = tmp_path / "tree.png"

    draw_static_figure(
        graph_nx=graph_nx,
        layout=compute_layout(graph_nx),
        engine=engine,
        path=engine.path_to("v"),
        output=output,
        show=False,
    )

    assert output.stat().st_size > 0


def test_animate_path_saves_gif(tmp_path: Path) -> None:
    graph = _build_graph()
    engine = ShortestPathEngine(graph, "u")
    graph_nx = build_networkx_graph(graph)
    output = tmp_path / "path.gif"

    animate_path(
        graph_nx=graph_nx,
        layout=compute_layout(graph_nx),
        engine=engine,
        path=engine.path_to("v"),
        output=output,
        show=False,
    )

    assert output.stat().st_size > 0


def test_settle_order_follows_distance() -> None:
    engine = ShortestPathEngine(_build_graph(), "u")

    # distances: u 0, x 2, y 3, v 5; z unreachable
    assert settle_order(engine) == ["u", "x", "y", "v"]


def test_animate_isolated_source(tmp_path: Path) -> None:
    graph = _build_graph()
    engine = ShortestPathEngine(graph, "z")
    graph_nx = build_networkx_graph(graph)
    output = tmp_path / "tree.gif"

    animate_path(
        graph_nx=graph_nx,
        layout=compute_layout(graph_nx),
        engine=engine,
        path=engine.path_to("z"),
        output=output,
        show=False,
    )

    assert output.stat().st_size > 0


@pytest.mark.parametrize(
    "extra",
    [["--source", "missing"], ["--target", "missing"]],
)
def test_main_rejects_unknown_vertices(extra) -> None:
    with pytest.raises(SystemExit) as excinfo:
        visualize_main([str(DATA_DIR / "sample_graph.yaml"), "--no-show", *extra])
    assert excinfo.value.code == 2


def test_main_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        visualize_main([str(tmp_path / "missing.txt"), "--no-show"])
    assert excinfo.value.code == 2


def test_main_writes_outputs(tmp_path: Path) -> None:
    static_out = tmp_path / "tree.png"
    animation_out = tmp_path / "tree.gif"

    visualize_main(
        [
            str(DATA_DIR / "sample_graph.txt"),
            "--no-show",
            "--static-out",
            str(static_out),
            "--animation-out",
            str(animation_out),
        ]
    )

    assert static_out.exists()
    assert animation_out.exists()
