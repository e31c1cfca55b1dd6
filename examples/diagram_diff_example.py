"""Example demonstrating diff between two diagrams."""

from blockgrid.ascii_diagram import Diagram
from blockgrid.diagram_components.diff import diff


def build_base_diagram() -> Diagram:
    diagram = Diagram()
    diagram.add("Root", 0, 0)
    diagram.add("API Gateway", 1, 0, id="api")
    diagram.add("Worker Pool", 1, 1, id="worker")
    diagram.add("Data Store", 1, 2, id="store")
    diagram.connect("Root", "api")
    diagram.connect("api", "worker")
    diagram.connect("worker", "store")
    return diagram


def build_modified_diagram() -> Diagram:
    diagram = Diagram()
    diagram.add("Root", 0, 0)
    diagram.add("API Layer", 1, 0, id="api")
    diagram.add("Worker Pool", 2, 1, id="worker")
    diagram.add("Cache", -1, 0)
    diagram.connect("Root", "api")
    diagram.connect("api", "worker")
    diagram.connect("Root", "Cache")
    return diagram


def main() -> None:
    original = build_base_diagram()
    modified = build_modified_diagram()

    result = diff(original, modified)
    print("Added blocks:", result.added_blocks)
    print("Removed blocks:", result.removed_blocks)
    print("Changed blocks:", result.changed_blocks)
    print("Moved blocks:", result.moved_blocks)
    print("Added edges:", result.added_edges)
    print("Removed edges:", result.removed_edges)


if __name__ == "__main__":
    main()
