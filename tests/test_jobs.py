import json

from peertutor.data import SEED_SUBJECTS
from peertutor.jobs import main


def test_create_tutor_and_seed(store):
    assert main(["create-tutor", "amy", "pass123", "--name", "Amy", "--admin"], store=store) == 0
    amy = store.get_tutor("amy")
    assert amy.name == "Amy"
    assert amy.is_admin
    assert store.get_password_hash("amy") != "pass123"

    # second attempt reports failure instead of raising
    assert main(["create-tutor", "amy", "pass123"], store=store) == 1

    assert main(["seed-subjects"], store=store) == 0
    assert len(store.list_subjects()) == len(SEED_SUBJECTS)


def test_sweep_prints_report(store, tutor, capsys):
    assert main(["sweep"], store=store) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["tutors_scanned"] == 1
    assert report["failures"] == {}
