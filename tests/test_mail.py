from hotel_booking import config
from hotel_booking.utils import mail


class FakeSMTP:
    instances = []

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *_):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        self.credentials = (user, password)

    def sendmail(self, sender, recipient, message):
        self.sent.append((sender, recipient, message))


def test_build_verification_message():
    msg = mail.build_message("guest@example.com", "123456", mail.VERIFICATION)
    assert msg["To"] == "guest@example.com"
    assert msg["Subject"] == "OTP verification - account registration"
    assert "123456" in msg.get_payload(decode=True).decode("utf-8")


def test_build_reset_message():
    msg = mail.build_message("guest@example.com", "654321", mail.RESET)
    assert msg["Subject"] == "Password reset OTP"


def test_send_email_without_credentials(monkeypatch):
    monkeypatch.setattr(config, "SMTP_USER", None)
    monkeypatch.setattr(mail.smtplib, "SMTP_SSL", FakeSMTP)
    FakeSMTP.instances = []
    mail.send_email("guest@example.com", "123456", mail.VERIFICATION)
    assert FakeSMTP.instances == []


def test_send_email_over_ssl(monkeypatch):
    monkeypatch.setattr(config, "SMTP_USER", "sender@example.com")
    monkeypatch.setattr(config, "SMTP_PASSWORD", "app-password")
    monkeypatch.setattr(config, "MAIL_FROM", "sender@example.com")
    monkeypatch.setattr(config, "SMTP_PORT", 465)
    monkeypatch.setattr(mail.smtplib, "SMTP_SSL", FakeSMTP)
    FakeSMTP.instances = []

    mail.send_email("guest@example.com", "123456", mail.RESET)

    assert len(FakeSMTP.instances) == 1
    server = FakeSMTP.instances[0]
    assert server.credentials == ("sender@example.com", "app-password")
    assert server.sent[0][1] == "guest@example.com"


def test_send_email_unknown_type(monkeypatch):
    monkeypatch.setattr(config, "SMTP_USER", "sender@example.com")
    monkeypatch.setattr(config, "SMTP_PASSWORD", "app-password")
    monkeypatch.setattr(mail.smtplib, "SMTP_SSL", FakeSMTP)
    FakeSMTP.instances = []
    mail.send_email("guest@example.com", "123456", "newsletter")
    assert FakeSMTP.instances == []
