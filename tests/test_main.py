"""Entry point — no app is built at import; uvicorn gets the factory."""

import apod_explorer.main as main


def test_import_builds_no_app():
    assert not hasattr(main, "app")


def test_run_serves_factory_on_configured_port(monkeypatch):
    calls = []
    monkeypatch.setattr(
        main.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)),
    )
    monkeypatch.setattr(
        main, "get_settings", lambda: main.Settings(host="127.0.0.1", port=6060),
    )

    main.run()

    assert calls == [(
        "apod_explorer.main:create_app",
        {"factory": True, "host": "127.0.0.1", "port": 6060},
    )]
