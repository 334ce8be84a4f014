from particle_field.app import main

main()
