"""HTTP layer: aiohttp application, routes and middlewares."""
