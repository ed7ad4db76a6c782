"""
=============================================================================
EXAMPLE: TOASTER SHOP ROUTING
=============================================================================

Resolves a handful of request lines against a small route table and
answers the way a server would: 200 with params, 405 with an Allow list,
404, or the parser's status for malformed lines.

    python examples/toaster_shop.py

=============================================================================
"""

from paramsparser import (
    MatcherConfig,
    ParamsResolver,
    RequestLineError,
    RouteTable,
    setup_logging,
)


def build_routes() -> RouteTable:
    # Most specific first: "/toasters/new" must precede "/toasters/:toaster_id"
    table = RouteTable()
    table.get("/", name="home")
    table.get("/toasters", name="toasters")
    table.get("/toasters/new", name="new_toaster")
    table.get("/toasters/:toaster_id", name="toaster")
    table.get("/users/sign_in", name="sign_in")
    table.post("/toasters")
    table.post("/users/sign_in")
    return table


def main():
    config = MatcherConfig(log_level="INFO")
    setup_logging(config)

    table = build_routes()
    table.print_routes()

    resolver = ParamsResolver(table, config)

    for line in [
        "GET / HTTP/1.1",
        "GET /toasters/new HTTP/1.1",
        "GET /toasters/42 HTTP/1.1",
        "DELETE /toasters HTTP/1.1",
        "GET /waffle-makers HTTP/1.1",
        "GET /toasters",
    ]:
        try:
            result = resolver.resolve(line)
        except RequestLineError as e:
            print(f"{line!r:36} → {e.status_code} {e}")
            continue

        if result:
            print(f"{line!r:36} → 200 {result.route.pattern} {result.params}")
            continue

        path = line.split()[1]
        allowed = table.allowed_methods(path)
        if allowed:
            print(f"{line!r:36} → 405 Allow: {', '.join(allowed)}")
        else:
            print(f"{line!r:36} → 404")

    print()
    print("url_for('toaster', toaster_id='7') =", table.url_for("toaster", toaster_id="7"))


if __name__ == "__main__":
    main()
