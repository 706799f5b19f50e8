"""Request controllers shared by the Pokédex services."""
