# Harbor town: run with
#   cityscript-build examples/harbor_town.py --mask examples/island_mask.txt

clear_all()

home = build_house(5, 5, 2, 'Home')
build_house(5, 5, floors=1, name='Guest house')   # (5, 5) is taken, moves next door
build_road(6, 4, direction='h')
build_road(6, 5)
build_road(6, 6)

build_park(4, 7, 'Harbor Green')
build_fountain(name='Town Square')
build_library(3, 4)
build_school(7, 7, name="St. Mary's")
build_apartment(8, 3, floors=6, name='Dockside Flats')
build_power_tower(col=10)

build_pool(0, 0)   # water corner, lands on the nearest shore tile
