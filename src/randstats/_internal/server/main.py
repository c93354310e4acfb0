from randstats._internal.server.app import make_app

app = make_app()
