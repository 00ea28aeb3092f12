import gravity_sim
from gravcore.population import SpawnConfig


def test_controller_steps_and_snapshots():
    sim = gravity_sim.SimulationController()
    sim.load_template("head_on.json")
    assert sim.advance(3) == 3
    views = sim.snapshot()
    assert [v.name for v in views] == ["A", "B"]
    for v in views:
        assert v.trail_end - v.trail_start == 4
        assert tuple(v.trail[v.trail_end - 1]) == tuple(v.position)
    assert sim.get_body(views[0].id).name == "A"


def test_paused_controller_does_not_advance():
    sim = gravity_sim.SimulationController()
    sim.load_template("head_on.json")
    assert sim.toggle_play() is False
    assert sim.advance(5) == 0
    sim.step_once()
    assert sim.frame == 1


def test_controller_records_collisions():
    sim = gravity_sim.SimulationController()
    sim.load_template("head_on.json")
    while len(sim.world) > 1 and sim.frame < 5000:
        sim.step_once()
    assert sim.last_collision_msg == "Merged A + B"
    t, n, m, _ = sim.summary()
    assert n == 1
    assert m == 2e24


def test_spawn():
    sim = gravity_sim.SimulationController()
    world = sim.spawn(SpawnConfig(num_planets=5, seed=1), step_time=60.0)
    assert sim.world is world
    assert len(world) == 5
    assert world.step_time == 60.0


def test_main_with_template():
    assert gravity_sim.main(["--template", "head_on.json", "--frames", "5", "--report-every", "2"]) == 0


def test_main_with_random_population():
    argv = ["--planets", "8", "--seed", "3", "--shape", "sphere", "--spawn-sun", "--frames", "2", "--log-level", "warning"]
    assert gravity_sim.main(argv) == 0


def test_main_lists_templates(capsys):
    assert gravity_sim.main(["--list-templates"]) == 0
    assert "head_on.json" in capsys.readouterr().out


def test_tail_length_applies_to_templates():
    sim = gravity_sim.SimulationController()
    sim.load_template("head_on.json", trace_num=2)
    sim.advance(4)
    assert all(v.trail_end - v.trail_start == 2 for v in sim.snapshot())
    assert gravity_sim.main(["--template", "head_on.json", "--tail-length", "2", "--frames", "1"]) == 0
