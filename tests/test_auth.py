from fundamentus_screener.auth import check_credentials, login_required


def test_gate_disabled_without_password():
    assert not login_required("")
    assert check_credentials("anyone", "anything", expected_username="admin", expected_password="")


def test_credentials_must_match():
    kw = dict(expected_username="admin", expected_password="s3nha")
    assert login_required("s3nha")
    assert check_credentials("admin", "s3nha", **kw)
    assert not check_credentials("admin", "errada", **kw)
    assert not check_credentials("root", "s3nha", **kw)
    assert not check_credentials("", "", **kw)
