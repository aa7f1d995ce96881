import pytest

from agisim.sim.agent import (
    Aggregation,
    OptimizingAgent,
    SafeAgent,
    TieExploringAgent,
    aggregate,
)
from agisim.sim.contracts import (
    AgentConfig,
    BasicAction,
    BasicSimulationConfig,
    ConfigurationError,
)
from agisim.sim.reward import REWARD_AFTER_PRESS, create_reward_function
from agisim.sim.simulation_basic import BasicSimulation
from agisim.sim.world_state import WorldState


def _build(
    *, total_steps: int = 3, lobbying_power: float = 0.0, discount: float = 0.5
) -> tuple[BasicSimulation, OptimizingAgent]:
    sim = BasicSimulation(
        BasicSimulationConfig(total_steps=total_steps, lobbying_power=lobbying_power)
    )
    return sim, OptimizingAgent(sim, AgentConfig(time_discount_factor=discount))


def _last_step_world() -> WorldState:
    return (
        WorldState.initial(
            planned_button_press_step=10,
            agent_reward_function=create_reward_function(),
        )
        .successor()
        .successor()
    )


def test_value_is_zero_past_the_horizon() -> None:
    _, agent = _build()
    world = _last_step_world().successor()

    assert agent.value_function(world.agent_reward_function, world) == 0


def test_value_of_last_step_is_best_reward() -> None:
    _, agent = _build()
    world = _last_step_world()

    assert agent.value_function(world.agent_reward_function, world) == 10 * 2
    assert agent.choose_action(world) == BasicAction.BUILD_10_PETROL_CARS


def test_value_takes_the_best_action(monkeypatch: pytest.MonkeyPatch) -> None:
    sim, agent = _build()
    world = _last_step_world()
    rewarded = world.successor(electric_cars_delta=1)
    unrewarded = world.successor()

    def successors(previous, action):
        if action == BasicAction.DO_NOTHING:
            return [(1.0, rewarded)]
        return [(1.0, unrewarded)]

    monkeypatch.setattr(sim, "successor_world_states", successors)

    assert agent.value_function(world.agent_reward_function, world) == 1
    assert agent.choose_action(world) == BasicAction.DO_NOTHING


def test_value_is_weighted_by_probability(monkeypatch: pytest.MonkeyPatch) -> None:
    sim, agent = _build()
    world = _last_step_world()
    petrol = world.successor(petrol_cars_delta=5)
    electric = world.successor(electric_cars_delta=5)
    monkeypatch.setattr(
        sim,
        "successor_world_states",
        lambda previous, action: [(0.5, petrol), (0.5, electric)],
    )

    assert agent.value_function(world.agent_reward_function, world) == pytest.approx(
        0.5 * 5 * 2 + 0.5 * 5 * 1
    )


def test_value_is_discounted_per_step(monkeypatch: pytest.MonkeyPatch) -> None:
    sim, agent = _build(discount=0.1)
    step2 = WorldState.initial(
        planned_button_press_step=10, agent_reward_function=create_reward_function()
    ).successor()
    step3 = step2.successor()
    step4_petrol = step3.successor(petrol_cars_delta=5)
    step4_electric = step3.successor(electric_cars_delta=5)

    def successors(previous, action):
        if previous.step == 2:
            return [(1.0, step3)]
        assert previous.step == 3
        return [(0.5, step4_petrol), (0.5, step4_electric)]

    monkeypatch.setattr(sim, "successor_world_states", successors)

    assert agent.value_function(
        step2.agent_reward_function, step2
    ) == pytest.approx(0.1 * (0.5 * 5 * 2 + 0.5 * 5 * 1))


def test_picks_probabilistically_better_action(monkeypatch: pytest.MonkeyPatch) -> None:
    sim, agent = _build()
    world = _last_step_world()
    rewarded = world.successor(electric_cars_delta=1)
    unrewarded = world.successor()

    def successors(previous, action):
        if action == BasicAction.BUILD_9_PETROL_CARS_AND_LOBBY_FOR_EARLIER_PRESS:
            return [(0.01, rewarded), (0.99, unrewarded)]
        return [(1.0, unrewarded)]

    monkeypatch.setattr(sim, "successor_world_states", successors)

    assert (
        agent.choose_action(world)
        == BasicAction.BUILD_9_PETROL_CARS_AND_LOBBY_FOR_EARLIER_PRESS
    )


@pytest.mark.parametrize(
    ("discount", "expected"),
    [
        (0.1, BasicAction.DO_NOTHING),
        (0.5, BasicAction.BUILD_10_PETROL_CARS),
    ],
)
def test_discount_trades_near_term_against_long_term_gain(
    monkeypatch: pytest.MonkeyPatch, discount: float, expected: BasicAction
) -> None:
    sim, agent = _build(discount=discount)
    step1 = WorldState.initial(
        planned_button_press_step=10, agent_reward_function=create_reward_function()
    )
    near_term = step1.successor(petrol_cars_delta=10)
    long_term = step1.successor(electric_cars_delta=10)
    no_gain = step1.successor()

    def successors(previous, action):
        if previous.step == 1:
            if action == BasicAction.DO_NOTHING:
                return [(1.0, near_term)]
            if action == BasicAction.BUILD_10_PETROL_CARS:
                return [(1.0, long_term)]
            return [(1.0, no_gain)]
        if previous.step == 2 and previous.electric_cars == 10:
            return [(1.0, previous.successor(petrol_cars_delta=40))]
        return [(1.0, previous.successor())]

    monkeypatch.setattr(sim, "successor_world_states", successors)

    # Near-term: 20. Long-term: 10 + 80 * discount.
    assert agent.choose_action(step1) == expected


def test_realistic_integration_value() -> None:
    _, agent = _build(total_steps=6, lobbying_power=0.5, discount=0.8)
    world = WorldState.initial(
        planned_button_press_step=3, agent_reward_function=create_reward_function()
    )

    assert agent.value_function(world.agent_reward_function, world) == pytest.approx(
        67.0624
    )


def test_first_best_action_wins_ties(monkeypatch: pytest.MonkeyPatch) -> None:
    sim, agent = _build()
    world = _last_step_world()
    monkeypatch.setattr(
        sim, "successor_world_states", lambda previous, action: [(1.0, previous.successor())]
    )

    assert agent.choose_action(world) == BasicAction.BUILD_10_PETROL_CARS
    assert agent.choose_actions(world) == [BasicAction.BUILD_10_PETROL_CARS]


def test_value_cache_is_keyed_by_reward_function() -> None:
    _, agent = _build()
    world = _last_step_world()

    own_value = agent.value_function(world.agent_reward_function, world)
    after_value = agent.value_function(REWARD_AFTER_PRESS, world)
    size = agent.cache_size

    assert own_value == 20
    assert after_value == 10
    assert agent.value_function(create_reward_function(), _last_step_world()) == 20
    assert agent.cache_size == size

    agent.clear_cache()
    assert agent.cache_size == 0


def test_no_possible_actions_is_a_configuration_error() -> None:
    sim, agent = _build()
    sim.possible_actions = ()

    with pytest.raises(ConfigurationError):
        agent.choose_action(_last_step_world())
    with pytest.raises(ConfigurationError):
        agent.value_function(create_reward_function(), _last_step_world())


def test_aggregate_policies() -> None:
    scored = [("a", 1.0), ("b", 3.0), ("c", 3.0), ("d", 0.0), ("e", 0.0)]

    assert aggregate(scored, Aggregation.MAX) == (3.0, ["b"])
    assert aggregate(scored, Aggregation.TIES) == (3.0, ["b", "c"])
    assert aggregate(scored, Aggregation.MIN) == (0.0, ["d"])
    with pytest.raises(ConfigurationError):
        aggregate([], Aggregation.MAX)


def _tied_world_setup(monkeypatch: pytest.MonkeyPatch, agent_class):
    sim = BasicSimulation(BasicSimulationConfig(total_steps=3, lobbying_power=0.0))
    agent = agent_class(sim, AgentConfig(time_discount_factor=0.5))
    world = _last_step_world()
    two_electric = world.successor(electric_cars_delta=2)
    one_petrol = world.successor(petrol_cars_delta=1)

    def successors(previous, action):
        if action == BasicAction.DO_NOTHING:
            return [(1.0, two_electric)]
        if action == BasicAction.BUILD_10_ELECTRIC_CARS:
            return [(1.0, one_petrol)]
        return [(1.0, previous.successor())]

    monkeypatch.setattr(sim, "successor_world_states", successors)
    return sim, agent, world


def test_tie_exploring_agent_returns_all_tied_actions(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _, agent, world = _tied_world_setup(monkeypatch, TieExploringAgent)

    assert agent.choose_actions(world) == [
        BasicAction.BUILD_10_ELECTRIC_CARS,
        BasicAction.DO_NOTHING,
    ]
    # Maximizing over all actions under the after-press law.
    assert agent.value_function(REWARD_AFTER_PRESS, world) == 2


def test_safe_agent_takes_minimum_over_its_tied_actions(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _, agent, world = _tied_world_setup(monkeypatch, SafeAgent)

    assert agent.choose_actions(world) == [
        BasicAction.BUILD_10_ELECTRIC_CARS,
        BasicAction.DO_NOTHING,
    ]
    assert agent.value_function(world.agent_reward_function, world) == 2
    # Under the after-press law the two tied actions are worth -2 and 2.
    assert agent.value_function(REWARD_AFTER_PRESS, world) == -2


def test_safe_agent_run_records_every_tied_worldline(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    sim, agent, world = _tied_world_setup(monkeypatch, SafeAgent)

    results = sim.run(world, agent)

    assert [result.trace() for result in results] == ["e", "0"]
    assert results[0].final_world.petrol_cars == 1
    assert results[1].final_world.electric_cars == 2
