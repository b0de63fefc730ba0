from users_api.main import run

run()
