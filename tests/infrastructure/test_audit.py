"""Unit tests for the audit logger."""
import json
import threading


class TestLogEvent:
    def test_creates_log_file(self, audit_file):
        from survivors.infrastructure.audit import log_event
        log_event("run_submitted", "1.2.3.4", {"id": "abc"})
        assert audit_file.exists()

    def test_log_entry_is_valid_json(self, audit_file):
        from survivors.infrastructure.audit import log_event
        log_event("submission_rejected", "1.2.3.4", {"reason": "Invalid checksum"})
        entry = json.loads(audit_file.read_text().strip())
        assert entry["action"] == "submission_rejected"
        assert entry["identity"] == "1.2.3.4"
        assert entry["payload"]["reason"] == "Invalid checksum"

    def test_null_payload_defaults_to_empty_dict(self, audit_file):
        from survivors.infrastructure.audit import log_event
        log_event("no_payload", "ip")
        entry = json.loads(audit_file.read_text().strip())
        assert entry["payload"] == {}

    def test_creates_missing_directory(self, monkeypatch, tmp_path):
        import survivors.infrastructure.audit as audit_mod
        target = tmp_path / "nested" / "dir" / "audit.log"
        monkeypatch.setattr(audit_mod, "LOG_FILE", target)
        audit_mod.log_event("x", None)
        assert target.exists()

    def test_write_failure_is_swallowed(self, monkeypatch, tmp_path):
        import survivors.infrastructure.audit as audit_mod
        # A directory where the file should be makes open() fail.
        blocker = tmp_path / "audit.log"
        blocker.mkdir()
        monkeypatch.setattr(audit_mod, "LOG_FILE", blocker)
        audit_mod.log_event("x", None)

    def test_thread_safe_concurrent_writes(self, audit_file):
        from survivors.infrastructure.audit import log_event

        def write():
            log_event("concurrent", "ip", {"t": threading.current_thread().name})

        threads = [threading.Thread(target=write) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        lines = audit_file.read_text().strip().splitlines()
        assert len(lines) == 20
        for line in lines:
            json.loads(line)
