"""Shared test fixtures.

  use_test_engine: redirects UoW + infra layer to a temp-file SQLite DB.
  roster_csv: a small spreadsheet export exercising the parser's edge cases.
  client: FastAPI TestClient wired to the test engine, a fake roster
          source and admin bypass.
"""
import pytest
from sqlmodel import SQLModel, create_engine


ROSTER_CSV = "\n".join([
    "Nombre,Telefono,RUT,Fecha Nacimiento,Mes,Edad,Direccion,Whatsapp,Comuna,"
    "Transporte,Genero,Tiempo,Dias,Solo,Grupos,Computador",
    'Ana Pérez,+56911111111,11.111.111-1,15/10/1990,Octubre,35,"Calle 1, depto 2",si,'
    'Maipú,si,Femenino,Más de 5 años,Todos los días,Acompañada,"si, Dorcas",si',
    "Juan Soto,+56922222222,,02/03/1980,Marzo,45,Pasaje 3,no,Puente Alto,no,"
    "Masculino,6 meses,Viernes y domingo,Solo,no,no",
    "",
    'Niño Díaz,,,,,8,,,Maipú,,Masculino,1-3 años,Domingo,Acompañado,"si, jovenes",',
    "   ,no name,,,,,,,,,,,,,,",
    "Short,row",
])


class FakeRosterLoader:
    """Stands in for RosterLoader; counts calls and can be told to fail."""

    def __init__(self, text: str = ROSTER_CSV) -> None:
        self.text = text
        self.calls = 0
        self.error: Exception | None = None

    def load(self):
        from churchdash.domain.roster import parse_roster
        self.calls += 1
        if self.error is not None:
            raise self.error
        return parse_roster(self.text)


@pytest.fixture
def roster_csv() -> str:
    return ROSTER_CSV


@pytest.fixture
def use_test_engine(tmp_path, monkeypatch):
    """Monkeypatch infra/db engine references to an isolated temp-file SQLite DB."""
    db_path = tmp_path / "test_churchdash.db"
    test_engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False},
    )

    import churchdash.models  # noqa: F401, register all ORM mappers
    SQLModel.metadata.create_all(test_engine)

    monkeypatch.setattr("churchdash.infra.db.engine.engine", test_engine)
    monkeypatch.setattr("churchdash.infra.db.uow.engine", test_engine)

    yield test_engine

    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def fake_loader() -> FakeRosterLoader:
    return FakeRosterLoader()


@pytest.fixture
def client(use_test_engine, fake_loader, monkeypatch):
    """FastAPI TestClient backed by the isolated test engine and fake roster."""
    from fastapi.testclient import TestClient
    from churchdash.api.app import create_app
    from churchdash.api.deps import get_roster_service
    from churchdash.config import settings
    from churchdash.services.roster_service import RosterService, RosterSnapshotHolder

    monkeypatch.setattr(settings, "BYPASS_ADMIN", True)
    holder = RosterSnapshotHolder()

    app = create_app()
    app.dependency_overrides[get_roster_service] = lambda: RosterService(fake_loader, holder)
    with TestClient(app) as c:
        yield c
