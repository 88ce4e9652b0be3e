"""One module per calculator: vehicle, warranty, parking, energy."""
