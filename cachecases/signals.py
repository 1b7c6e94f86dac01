from blinker import NamedSignal


on_descriptor_inspected = NamedSignal(f"{__package__}.on_descriptor_inspected")
on_scenario_bound = NamedSignal(f"{__package__}.on_scenario_bound")
