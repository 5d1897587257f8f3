from zevenetplugin.checks import backend, farm

from .conftest import APPLIANCE_ARGS


def farms_document(*farms) -> dict:
    return {"description": "List all farms stats", "farms": list(farms)}


WEB = {
    "farmname": "web",
    "profile": "http",
    "status": "up",
    "vip": "192.168.101.58",
    "vport": "80",
    "established": 12,
    "pending": 3,
}

DNS = {
    "farmname": "dns",
    "profile": "l4xnat",
    "status": "down",
    "vip": "192.168.101.59",
    "vport": "53",
    "established": 0,
    "pending": 0,
}


class TestFarm:
    def test_up(self, zapi, run_plugin) -> None:
        get = zapi(farms_document(DNS, WEB))
        code, out = run_plugin(farm.main, APPLIANCE_ARGS + ["-n", "web"])
        assert 0 == code
        assert (
            "ZEVENET_FARM OK - Zevenet ADC Load Balancer http farm 'web' listen at"
            " 192.168.101.58:80 is up"
            " (established connections: 12 / pending connections: 3)"
            " | 'Stablished connections'=12;; 'Pending connections'=3;;\n" == out
        )
        assert get.call_args.args[0].endswith("/zapi/v3/zapi.cgi/stats/farms")

    def test_down(self, zapi, run_plugin) -> None:
        zapi(farms_document(DNS, WEB))
        code, out = run_plugin(farm.main, APPLIANCE_ARGS + ["--name", "dns"])
        assert 2 == code
        assert out.startswith(
            "ZEVENET_FARM CRITICAL - Zevenet ADC Load Balancer l4xnat farm 'dns'"
            " listen at 192.168.101.59:53 is down"
        )

    def test_not_found(self, zapi, run_plugin) -> None:
        zapi(farms_document(DNS, WEB))
        code, out = run_plugin(farm.main, APPLIANCE_ARGS + ["-n", "mail"])
        assert 2 == code
        assert (
            "ZEVENET_FARM CRITICAL - Zevenet ADC Load Balancer farm 'mail' not found!\n"
            == out
        )

    def test_no_farms(self, zapi, run_plugin) -> None:
        zapi(farms_document())
        code, out = run_plugin(farm.main, APPLIANCE_ARGS + ["-n", "web"])
        assert 2 == code
        assert "farm 'web' not found!" in out

    def test_name_required(self, zapi, run_plugin) -> None:
        code, out = run_plugin(farm.main, APPLIANCE_ARGS)
        assert 3 == code
        assert out.startswith("ZEVENET_FARM UNKNOWN - ")
        zapi.get.assert_not_called()


def backends_document(*backends) -> dict:
    return {"description": "List farm backends", "backends": list(backends)}


UP = {
    "id": 0,
    "ip": "192.168.0.10",
    "port": 80,
    "service": "srv1",
    "status": "up",
    "established": 5,
    "pending": 0,
}

DOWN = {
    "id": 1,
    "ip": "192.168.0.11",
    "port": 80,
    "service": "srv1",
    "status": "down",
    "established": 250,
    "pending": 1,
}

BACKEND_ARGS = APPLIANCE_ARGS + ["-f", "web", "-w", "100", "-c", "200"]


class TestBackend:
    def test_up(self, zapi, run_plugin) -> None:
        get = zapi(backends_document(UP, DOWN))
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0"])
        assert 0 == code
        assert (
            "ZEVENET_FARM_BACKEND OK - Backend with ID '0' and IP address"
            " '192.168.0.10' in farm 'web' is in 'Up' state"
            " (established connections: 5 / pending connections: 0)"
            " | 'Backend established connections'=5;100;200"
            " 'Backend pending connections'=0;;\n" == out
        )
        assert get.call_args.args[0].endswith("/zapi/v3/zapi.cgi/stats/farms/web")

    def test_threshold(self, zapi, run_plugin) -> None:
        zapi(backends_document(dict(UP, established=150)))
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0"])
        assert 1 == code
        assert out.startswith(
            "ZEVENET_FARM_BACKEND WARNING - 150 established connections in backend"
            " with ID '0' and IP address '192.168.0.10' in farm 'web' which is in"
            " 'Up' state (established connections: 150 / pending connections: 0)"
        )

    def test_down_ignores_thresholds(self, zapi, run_plugin) -> None:
        zapi(backends_document(UP, DOWN))
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "1"])
        assert 2 == code
        assert out.startswith(
            "ZEVENET_FARM_BACKEND CRITICAL - Backend with ID '1' and IP address"
            " '192.168.0.11' in farm 'web' is in 'down' state"
            " (established connections: 250 / pending connections: 1)"
        )

    def test_service_filter(self, zapi, run_plugin) -> None:
        other = dict(UP, service="srv2", ip="192.168.0.20")
        zapi(backends_document(UP, other))
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0", "-s", "srv2"])
        assert 0 == code
        assert "IP address '192.168.0.20'" in out

    def test_not_found(self, zapi, run_plugin) -> None:
        zapi(backends_document(UP, DOWN))
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "7"])
        assert 2 == code
        assert (
            "ZEVENET_FARM_BACKEND CRITICAL - Zevenet ADC Load Balancer backend with"
            " ID '7' not found in farm 'web'!\n" == out
        )

    def test_not_found_in_service(self, zapi, run_plugin) -> None:
        zapi(backends_document(UP, DOWN))
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0", "-s", "x"])
        assert 2 == code
        assert "not found in service 'x' of farm 'web'!" in out

    def test_farm_name_is_quoted_in_url(self, zapi, run_plugin) -> None:
        get = zapi(backends_document(UP))
        args = APPLIANCE_ARGS + ["-f", "my farm", "-b", "0", "-w", "100"]
        run_plugin(backend.main, args)
        assert get.call_args.args[0].endswith("/stats/farms/my%20farm")

    def test_farm_and_backend_required(self, zapi, run_plugin) -> None:
        code, out = run_plugin(backend.main, APPLIANCE_ARGS + ["-w", "100"])
        assert 3 == code
        assert out.startswith("ZEVENET_FARM_BACKEND UNKNOWN - ")
        zapi.get.assert_not_called()

    def test_threshold_required(self, zapi, run_plugin) -> None:
        code, out = run_plugin(
            backend.main, APPLIANCE_ARGS + ["-f", "web", "-b", "0"]
        )
        assert 3 == code
        assert "You didn't supply a threshold argument" in out

    def test_unknown_farm(self, zapi, run_plugin) -> None:
        zapi({"message": "The farmname web does not exist."}, status_code=404)
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0"])
        assert 2 == code
        assert (
            "ZEVENET_FARM_BACKEND CRITICAL - Zevenet ADC Load Balancer backend with"
            " ID '0' not found in farm 'web'!\n" == out
        )

    def test_document_without_backends(self, zapi, run_plugin) -> None:
        zapi({"message": "The farmname web does not exist."})
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0"])
        assert 2 == code
        assert (
            "ZEVENET_FARM_BACKEND CRITICAL - Zevenet ADC Load Balancer backend with"
            " ID '0' not found in farm 'web'!\n" == out
        )

    def test_server_error_stays_unknown(self, zapi, run_plugin) -> None:
        zapi({"message": "Internal error"}, status_code=500)
        code, out = run_plugin(backend.main, BACKEND_ARGS + ["-b", "0"])
        assert 3 == code
        assert out.startswith("ZEVENET_FARM_BACKEND UNKNOWN - ")
