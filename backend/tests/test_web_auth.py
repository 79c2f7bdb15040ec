from conftest import sign_up


def test_visitor_sees_landing_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Get Started" in response.text
    assert "Sign Out" not in response.text


def test_sign_up_signs_in_and_shows_empty_dashboard(client, backend):
    response = sign_up(client)

    assert response.status_code == 303
    assert response.headers["location"] == "/"

    home = client.get("/")
    assert "My Pets" in home.text
    assert "No pets registered yet" in home.text
    assert "Alex Owner" in home.text


def test_sign_up_validation_runs_before_identity_call(client, backend):
    response = sign_up(client, confirm_password="different")

    assert response.status_code == 400
    assert "Passwords do not match" in response.text
    assert backend.requests == []
    # Entered values survive, passwords do not.
    assert 'value="alex@example.com"' in response.text
    assert "secret123" not in response.text


def test_sign_up_short_password(client, backend):
    response = sign_up(client, password="abc")

    assert response.status_code == 400
    assert "Password must be at least 6 characters" in response.text
    assert backend.requests == []


def test_sign_up_pending_confirmation_shows_notice(client, backend):
    backend.auto_confirm = False

    response = sign_up(client)

    assert response.status_code == 200
    assert "Check your email to confirm your address" in response.text
    assert "Get Started" in client.get("/").text


def test_duplicate_sign_up_shows_backend_message(client, backend):
    sign_up(client)
    client.post("/auth/sign-out", follow_redirects=False)

    response = sign_up(client)

    assert response.status_code == 400
    assert "User already registered" in response.text


def test_sign_in_with_wrong_password(client, signed_in):
    client.post("/auth/sign-out", follow_redirects=False)

    response = client.post(
        "/auth/sign-in",
        data={"email": "alex@example.com", "password": "not-it"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert "Invalid login credentials" in response.text


def test_sign_out_then_sign_in_again(client, signed_in):
    response = client.post("/auth/sign-out", follow_redirects=False)

    assert response.status_code == 303
    assert "Get Started" in client.get("/").text

    response = client.post(
        "/auth/sign-in",
        data={"email": "alex@example.com", "password": "secret123"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert "My Pets" in client.get("/").text


def test_auth_page_modes(client):
    assert "Welcome back!" in client.get("/auth").text
    assert "Join PetConnect today" in client.get("/auth?mode=sign-up").text
    assert "Welcome back!" in client.get("/auth?mode=bogus").text


def test_auth_page_redirects_signed_in_owner(client, signed_in):
    response = client.get("/auth", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_dashboard_path_requires_sign_in(client):
    response = client.get("/dashboard", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/auth"


def test_unknown_paths_redirect_home(client):
    response = client.get("/no/such/page", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_identity_outage_does_not_sign_owner_out(client, backend, signed_in):
    backend.user_outages = 1

    during = client.get("/")
    after = client.get("/")

    assert during.status_code == 200
    assert "Get Started" in during.text
    assert "My Pets" in after.text


def test_unknown_post_redirects_home(client):
    response = client.post("/no/such/form", data={"x": "1"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
