from demolab.utils import healthcheck

from conftest import FakeCompose


def test_check_services_reports_each_service(runtime_config, catalog, capsys):
    compose = FakeCompose(logs={"gitlab": "Server initialized", "sonarqube": "starting"})

    status = healthcheck.check_services(["gitlab", "sonarqube", "jenkins"], runtime_config, catalog, compose)

    assert status == {"gitlab": True, "sonarqube": False, "jenkins": False}
    assert "Unknown service: jenkins" in capsys.readouterr().out


def test_main_without_env_file(monkeypatch, tmp_path):
    monkeypatch.setattr(healthcheck, "configure_logging", lambda: None)
    monkeypatch.setattr(healthcheck, "ENV_FILE", str(tmp_path / ".env"))

    assert healthcheck.main([]) == 1
    assert not (tmp_path / ".env").exists()


def test_main_all_ready(monkeypatch, tmp_path):
    env = tmp_path / ".env"
    env.write_text("DEMO_NAME=demo\n")
    monkeypatch.setattr(healthcheck, "configure_logging", lambda: None)
    monkeypatch.setattr(healthcheck, "ENV_FILE", str(env))
    monkeypatch.setattr(healthcheck, "SERVICES_FILE", str(tmp_path / "services.yml"))
    monkeypatch.setattr(healthcheck, "ComposeClient", lambda *args: FakeCompose())

    assert healthcheck.main(["gitlab", "dependency-track"]) == 0
