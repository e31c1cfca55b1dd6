from blockgrid.ascii_diagram import Diagram
from rich import print
from rich.markup import escape


def main() -> None:
    diagram = Diagram()

    client = diagram.add("Client", 0, 0)
    gateway = diagram.add("API Gateway", 1, 0)
    auth = diagram.add("Auth\nService", 2, -1)
    orders = diagram.add("Orders", 2, 1)
    diagram.add("Postgres", 3, 1, id="db")

    diagram.connect(client, gateway, label="https")
    diagram.connect(gateway, auth)
    diagram.connect(gateway, orders)
    diagram.connect(orders, "db", label="sql")

    print(escape(diagram.render(padding=1)))


if __name__ == "__main__":
    main()
