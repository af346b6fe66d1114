from .plot import direction_curve_view, frequency_size_view
